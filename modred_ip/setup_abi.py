"""
Copy the ModredIP ABI from a compiled Hardhat artifact into the package
"""

import argparse
import json
import logging
from pathlib import Path

from modred_ip.contracts import ABI_FILE
from modred_ip.utils.logging_config import configure_logging

logger = logging.getLogger(__name__)

DEFAULT_ARTIFACT = Path("artifacts") / "contracts" / "ModredIP.sol" / "ModredIP.json"


def setup_abi(artifact: Path = DEFAULT_ARTIFACT, dest: Path = ABI_FILE) -> bool:
    """Extract the "abi" list from a Hardhat artifact and write it to dest"""
    logger.info("🔧 Setting up ABI file...")
    logger.info(f"   Source: {artifact}")
    logger.info(f"   Destination: {dest}")

    if not artifact.exists():
        logger.error("❌ Artifact not found! Compile the contract first: npx hardhat compile")
        return False

    data = json.loads(artifact.read_text(encoding="utf-8"))
    abi = data["abi"] if isinstance(data, dict) else data
    if not abi:
        logger.error(f"❌ No ABI in {artifact}")
        return False

    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_text(json.dumps(abi, indent=2) + "\n", encoding="utf-8")

    logger.info(f"✅ ABI written ({len(abi)} entries)")
    return True


def main():
    configure_logging()
    parser = argparse.ArgumentParser(description=__doc__.strip())
    parser.add_argument("artifact", nargs="?", type=Path, default=DEFAULT_ARTIFACT)
    parser.add_argument("--dest", type=Path, default=ABI_FILE)
    args = parser.parse_args()
    raise SystemExit(0 if setup_abi(args.artifact, args.dest) else 1)


if __name__ == "__main__":
    main()
