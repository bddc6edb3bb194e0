"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest
from cryptography.hazmat.primitives.asymmetric import rsa

from asminfo.core.models.version_info import VersionFacts
from asminfo.core.services.strong_name import private_key_blob_from_rsa


@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.RSAPrivateKey:
    """A 1024-bit RSA key, generated once per test session."""
    return rsa.generate_private_key(public_exponent=65537, key_size=1024)


@pytest.fixture
def key_pair_blob(rsa_private_key: rsa.RSAPrivateKey) -> bytes:
    """The session key serialized as a .snk PRIVATEKEYBLOB."""
    return private_key_blob_from_rsa(rsa_private_key)


@pytest.fixture
def snk_file(tmp_path: Path, key_pair_blob: bytes) -> Path:
    """A key pair .snk file on disk."""
    path = tmp_path / "signing.snk"
    path.write_bytes(key_pair_blob)
    return path


@pytest.fixture
def basic_facts() -> VersionFacts:
    """The minimal fact set used in end-to-end scenarios."""
    return VersionFacts(
        assembly_version="1.2.3.0",
        git_commit_id="abc123",
        root_namespace="",
        emit_non_version_custom_attributes=False,
    )


@pytest.fixture
def full_facts() -> VersionFacts:
    """Every descriptive fact populated."""
    return VersionFacts(
        assembly_version="2.0.0.0",
        assembly_file_version="2.0.5.0",
        assembly_informational_version="2.0.5-beta+g1a2b3c4",
        assembly_name="Contoso.Widgets",
        assembly_title="Contoso Widgets",
        assembly_product="Widgets",
        assembly_copyright="(c) Contoso",
        assembly_company="Contoso",
        assembly_configuration="Release",
        git_commit_id="1a2b3c4d5e6f",
        git_commit_date_ticks="637134336000000000",
        root_namespace="Contoso.Widgets",
        emit_non_version_custom_attributes=True,
    )
