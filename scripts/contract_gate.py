from __future__ import annotations

import subprocess
import sys

CONTRACT_TESTS = ("tests/test_contract_gate.py", "tests/test_validation.py")


def main() -> int:
    cmd = [sys.executable, "-m", "pytest", "-q", *CONTRACT_TESTS]
    completed = subprocess.run(cmd, check=False)
    if completed.returncode:
        print("contract gate failed: CLI, MCP and schemas are out of sync", file=sys.stderr)
    return int(completed.returncode)


if __name__ == "__main__":
    raise SystemExit(main())
