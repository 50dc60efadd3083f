"""Compilation artifact parsers for marketplace-deploy."""

import json
import re
from pathlib import Path
from typing import Optional, Union

from .constants import HARDHAT_ARTIFACT_FORMAT
from .exceptions import DefectiveArtifactError
from .paths import find_artifact_path
from .types import ContractArtifact

# solc leaves __$<34 hex chars>$__ where a library address must be linked in
LIBRARY_PLACEHOLDER = re.compile(r"__\$[0-9a-fA-F]{34}\$__")


def parse_hardhat_artifact(file_path: Path) -> ContractArtifact:
    """
    Parse a hardhat compilation artifact.

    Args:
        file_path: Path to <Name>.sol/<Name>.json

    Returns:
        ContractArtifact with abi and 0x-prefixed bytecode

    Raises:
        DefectiveArtifactError: If the file is not a deployable hardhat artifact
    """
    try:
        with open(file_path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise DefectiveArtifactError(f"Artifact {file_path} is not valid JSON: {e}") from e

    artifact_format = data.get("_format")
    if artifact_format is not None and artifact_format != HARDHAT_ARTIFACT_FORMAT:
        raise DefectiveArtifactError(
            f"Unsupported artifact format '{artifact_format}' in {file_path}"
        )

    missing = [key for key in ("contractName", "abi", "bytecode") if key not in data]
    if missing:
        raise DefectiveArtifactError(
            f"Missing {', '.join(missing)} in hardhat artifact: {file_path}"
        )

    bytecode = _normalize_hex(data["bytecode"])
    if bytecode == "0x":
        raise DefectiveArtifactError(
            f"Contract '{data['contractName']}' has no bytecode "
            "(abstract contract or interface) and cannot be deployed"
        )
    if LIBRARY_PLACEHOLDER.search(bytecode):
        raise DefectiveArtifactError(
            f"Contract '{data['contractName']}' has unlinked library references"
        )

    return ContractArtifact(
        contract_name=data["contractName"],
        source_name=data.get("sourceName", ""),
        abi=data["abi"],
        bytecode=bytecode,
        deployed_bytecode=_normalize_hex(data.get("deployedBytecode", "0x")),
        path=Path(file_path),
    )


def load_artifact(
    contract_name: str, artifacts_root: Optional[Union[Path, str]] = None
) -> ContractArtifact:
    """
    Find and parse the artifact for a contract name.

    Raises:
        ArtifactNotFoundError: If no artifact exists for the name
        DefectiveArtifactError: If the artifact is ambiguous or not deployable
    """
    artifact = parse_hardhat_artifact(find_artifact_path(contract_name, artifacts_root))
    if artifact.contract_name != contract_name:
        raise DefectiveArtifactError(
            f"Artifact {artifact.path} declares contract '{artifact.contract_name}', "
            f"expected '{contract_name}'"
        )
    return artifact


def _normalize_hex(value: str) -> str:
    if not value.startswith("0x"):
        value = "0x" + value
    return value
