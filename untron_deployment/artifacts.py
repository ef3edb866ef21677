import json
from pathlib import Path
from typing import Dict

from ape.contracts import ContractContainer
from ethpm_types import ContractType

from untron_deployment.constants import ARTIFACT_PATHS
from untron_deployment.exceptions import ArtifactError
from untron_deployment.utils import _load_json

Artifacts = Dict[str, ContractContainer]


def _get_bytecode(data: Dict, contract_name: str) -> str:
    """
    Returns the creation bytecode of a compiler artifact.

    foundry-zksync nests it as bytecode.object, hardhat stores a plain string.
    """
    bytecode = data.get("bytecode")
    if isinstance(bytecode, dict):
        bytecode = bytecode.get("object")
    if not bytecode or not isinstance(bytecode, str):
        raise ArtifactError(f"Artifact for {contract_name} has no bytecode.")
    if not bytecode.startswith("0x"):
        bytecode = f"0x{bytecode}"
    return bytecode


def load_artifact(filepath: Path, contract_name: str) -> ContractContainer:
    """Loads a single compiler artifact as an ape contract container."""
    if not filepath.exists():
        raise ArtifactError(f"No artifact found for {contract_name} at {filepath}.")
    try:
        data = _load_json(filepath)
    except json.JSONDecodeError as e:
        raise ArtifactError(f"Artifact for {contract_name} at {filepath} is not JSON: {e}")

    abi = data.get("abi")
    if not isinstance(abi, list):
        raise ArtifactError(f"Artifact for {contract_name} has no ABI.")

    try:
        contract_type = ContractType.model_validate(
            {
                "contractName": data.get("contractName") or contract_name,
                "abi": abi,
                "deploymentBytecode": {"bytecode": _get_bytecode(data, contract_name)},
            }
        )
    except ValueError as e:
        raise ArtifactError(f"Malformed artifact for {contract_name}: {e}")
    return ContractContainer(contract_type)


def load_artifacts(contracts_dir: Path) -> Artifacts:
    """Loads every artifact the deployment may need, before anything is deployed."""
    print(f"Loading contract artifacts from {contracts_dir}...")
    artifacts = dict()
    for contract_name, relative_path in ARTIFACT_PATHS.items():
        artifacts[contract_name] = load_artifact(contracts_dir / relative_path, contract_name)
    return artifacts
