"""
Manual runner — database build (REAL execution)

This script:
- Ensures repo root is on PYTHONPATH
- Uses the real configs/parameters.yaml and data/ tree
- Runs build_database.main()
- Does NOT clean up dist/ afterwards (inspect outputs freely)

Usage:
    python scripts/run_build.py
"""

from __future__ import annotations

import sys
from pathlib import Path

# ---------------------------------------------------------------------
# Ensure repo root is on PYTHONPATH so `import motodb.*` works
# ---------------------------------------------------------------------
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

# ---------------------------------------------------------------------
# Imports AFTER path fix
# ---------------------------------------------------------------------
from motodb.batch.build_database import main as build_main
from motodb.utils.config import load_parameters
from motodb.utils.logging import get_logger


def main() -> int:
    logger = get_logger(__name__)

    logger.info("=" * 80)
    logger.info("RUNNING DATABASE BUILD — REAL EXECUTION")
    logger.info("Repo root: %s", REPO_ROOT)
    logger.info("Working directory: %s", Path.cwd())
    logger.info("=" * 80)

    # -----------------------------------------------------------------
    # Preconditions (explicit, fail fast)
    # -----------------------------------------------------------------
    parameters_path = REPO_ROOT / "configs/parameters.yaml"
    if not parameters_path.exists():
        raise FileNotFoundError(f"Required file missing: {parameters_path}")

    params = load_parameters(parameters_path)
    schema_path = REPO_ROOT / params.paths.schema_path
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema file missing: {schema_path}")

    logger.info("Invoking build_database.main()")
    rc = build_main(["--parameters-path", str(parameters_path)])

    logger.info("Build finished with return code: %s", rc)
    logger.info("=" * 80)
    return rc


if __name__ == "__main__":
    raise SystemExit(main())
