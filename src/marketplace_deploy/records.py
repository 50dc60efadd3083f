"""Hardhat-deploy style deployment records for marketplace-deploy."""

import json
from pathlib import Path
from typing import Any, Dict, Union

from loguru import logger

from .exceptions import DefectiveDeploymentError
from .paths import get_deployment_record_path
from .types import ContractDeployment


def load_deployment_record(file_path: Path) -> ContractDeployment:
    """
    Read a record written by save_deployment_record.

    The contract name and network come from the <network>/<Name>.json layout.

    Raises:
        DefectiveDeploymentError: If the record is not valid JSON or lacks
            address, abi, transactionHash or receipt.blockNumber
    """
    file_path = Path(file_path)
    try:
        with open(file_path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise DefectiveDeploymentError(f"Deployment record {file_path} is not valid JSON") from e

    receipt = data.get("receipt", {})
    missing = [key for key in ("address", "abi", "transactionHash") if key not in data]
    if "blockNumber" not in receipt:
        missing.append("receipt.blockNumber")
    if missing:
        raise DefectiveDeploymentError(
            f"Missing {', '.join(missing)} in deployment record: {file_path}"
        )

    return ContractDeployment(
        name=file_path.stem,
        network=file_path.parent.name,
        address=data["address"],
        transaction_hash=data["transactionHash"],
        block=receipt["blockNumber"],
        deployer=receipt.get("from", ""),
        abi=data["abi"],
        gas_used=receipt.get("gasUsed"),
        bytecode=data.get("bytecode"),
        deployed_bytecode=data.get("deployedBytecode"),
        constructor_args=data.get("args", []),
    )


def _previous_num_deployments(record_path: Path) -> int:
    try:
        with open(record_path) as f:
            return int(json.load(f).get("numDeployments", 1))
    except (ValueError, AttributeError, TypeError):
        logger.warning(f"Overwriting unreadable deployment record {record_path}")
        return 0


def save_deployment_record(
    deployment: ContractDeployment, deployments_root: Union[Path, str]
) -> Path:
    """
    Write a deployment to <deployments_root>/<network>/<Name>.json.

    numDeployments counts every deployment recorded at that path, so redeploying
    the same contract on the same network increments it.

    Returns:
        Path of the written record
    """
    record_path = get_deployment_record_path(deployments_root, deployment.network, deployment.name)

    num_deployments = 1
    if record_path.exists():
        num_deployments = _previous_num_deployments(record_path) + 1

    record: Dict[str, Any] = {
        "address": deployment.address,
        "abi": deployment.abi,
        "transactionHash": deployment.transaction_hash,
        "receipt": {
            "from": deployment.deployer,
            "contractAddress": deployment.address,
            "transactionHash": deployment.transaction_hash,
            "blockNumber": deployment.block,
        },
        "args": deployment.constructor_args,
        "numDeployments": num_deployments,
    }
    if deployment.gas_used is not None:
        record["receipt"]["gasUsed"] = deployment.gas_used
    if deployment.bytecode is not None:
        record["bytecode"] = deployment.bytecode
    if deployment.deployed_bytecode is not None:
        record["deployedBytecode"] = deployment.deployed_bytecode

    record_path.parent.mkdir(parents=True, exist_ok=True)
    with open(record_path, "w") as f:
        json.dump(record, f, indent=2)

    logger.info(f"Saved deployment record to {record_path}")
    return record_path
