"""Path management utilities for marketplace-deploy."""

from pathlib import Path
from typing import List, Optional, Union

from .exceptions import ArtifactNotFoundError, DefectiveArtifactError


def get_artifacts_dir(artifacts_root: Optional[Union[Path, str]] = None) -> Path:
    """
    Get hardhat artifacts directory.

    Args:
        artifacts_root: Custom artifacts directory (defaults to ./artifacts)

    Returns:
        Absolute path to the artifacts directory
    """
    if artifacts_root is None:
        return Path.cwd() / "artifacts"
    return Path(artifacts_root).absolute()


def find_artifact_path(
    contract_name: str, artifacts_root: Optional[Union[Path, str]] = None
) -> Path:
    """
    Locate the compilation artifact for a contract name.

    Hardhat writes artifacts to contracts/<path>/<Name>.sol/<Name>.json; contracts
    declared in a differently-named source file are found by the fallback scan.

    Args:
        contract_name: Contract name, e.g. "DynamicNFTMarketplace"
        artifacts_root: Custom artifacts directory (defaults to ./artifacts)

    Returns:
        Path to the artifact JSON file

    Raises:
        ArtifactNotFoundError: If no artifact exists for the name
        DefectiveArtifactError: If the name matches more than one artifact
    """
    root = get_artifacts_dir(artifacts_root)
    if not root.is_dir():
        raise ArtifactNotFoundError(
            f"Artifacts directory not found at {root}. Compile the contracts first."
        )

    matches = _artifact_candidates(root.glob(f"contracts/**/{contract_name}.sol/{contract_name}.json"))
    if not matches:
        matches = _artifact_candidates(root.glob(f"**/{contract_name}.json"))

    if not matches:
        raise ArtifactNotFoundError(
            f"Artifact for contract '{contract_name}' not found in {root}"
        )
    if len(matches) > 1:
        found = ", ".join(str(p.relative_to(root)) for p in matches)
        raise DefectiveArtifactError(
            f"Contract name '{contract_name}' is ambiguous, matching artifacts: {found}"
        )
    return matches[0]


def _artifact_candidates(paths) -> List[Path]:
    return sorted(
        p
        for p in paths
        if p.is_file() and "build-info" not in p.parts and not p.name.endswith(".dbg.json")
    )


def get_deployment_record_path(
    deployments_root: Union[Path, str], network: str, contract_name: str
) -> Path:
    """
    Get the hardhat-deploy style record path for a deployed contract.

    Returns:
        Path to <deployments_root>/<network>/<contract_name>.json
    """
    return Path(deployments_root).absolute() / network / f"{contract_name}.json"
