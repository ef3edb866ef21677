import json
import os
import tempfile
from pathlib import Path
from typing import NamedTuple, Optional

from ape.contracts import ContractInstance
from eth_typing import ChecksumAddress

from untron_deployment.config import Dependencies, DeploymentConfig
from untron_deployment.exceptions import DeploymentError
from untron_deployment.utils import _load_json, is_unresolved

MANIFEST_JSON_FORMAT = {"indent": 2, "separators": (",", ": ")}


class DeploymentManifest(NamedTuple):
    """Represents the record of a completed Untron deployment."""

    network: str
    untron: ChecksumAddress
    untronImplementation: ChecksumAddress
    spokePool: ChecksumAddress
    aggregationRouter: ChecksumAddress
    usdt: ChecksumAddress
    sp1Verifier: ChecksumAddress
    admin: Optional[ChecksumAddress]
    unlimitedCreator: Optional[ChecksumAddress]
    registrar: Optional[ChecksumAddress]
    deployer: ChecksumAddress


def build_manifest(
    config: DeploymentConfig,
    untron: ContractInstance,
    implementation: ContractInstance,
    dependencies: Dependencies,
    deployer_address: ChecksumAddress,
) -> DeploymentManifest:
    manifest = DeploymentManifest(
        network=config.network,
        untron=untron.address,
        untronImplementation=implementation.address,
        spokePool=dependencies.spoke_pool,
        aggregationRouter=dependencies.aggregation_router,
        usdt=dependencies.usdt,
        sp1Verifier=dependencies.sp1_verifier,
        admin=config.recipients.admin,
        unlimitedCreator=config.recipients.unlimited_creator,
        registrar=config.recipients.registrar,
        deployer=deployer_address,
    )
    for field, value in manifest._asdict().items():
        if is_unresolved(value):
            raise DeploymentError(f"Refusing to write placeholder address for {field}.")
    return manifest


def write_manifest(manifest: DeploymentManifest, filepath: Path) -> Path:
    """
    Writes the manifest, replacing any previous file at the same path.
    """
    filepath.parent.mkdir(parents=True, exist_ok=True)
    if filepath.exists():
        print(f"Overwriting existing manifest at {filepath}.")

    fd, temp_filepath = tempfile.mkstemp(
        dir=filepath.parent, prefix=f".{filepath.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w") as file:
            json.dump(manifest._asdict(), file, **MANIFEST_JSON_FORMAT)
            file.write("\n")
        os.replace(temp_filepath, filepath)
    except BaseException:
        os.unlink(temp_filepath)
        raise

    print(f"(i) Manifest written to {filepath}!")
    return filepath


def read_manifest(filepath: Path) -> DeploymentManifest:
    data = _load_json(filepath)
    return DeploymentManifest(**{field: data.get(field) for field in DeploymentManifest._fields})
