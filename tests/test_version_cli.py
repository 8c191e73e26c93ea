import re
import subprocess
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib  # type: ignore
else:  # pragma: no cover - fallback for older interpreters
    import tomli as tomllib  # type: ignore


def test_cli_version_matches_package():
    proc = subprocess.run([sys.executable, '-m', 'psquared.cli', '--version'], capture_output=True, text=True)
    assert proc.returncode == 0
    out = (proc.stdout + proc.stderr).strip()
    m = re.match(r'psquared\s+(\d+\.\d+\.\d+)', out)
    assert m, f'Unexpected version output: {out}'
    import psquared
    assert m.group(1) == psquared.__version__


def test_version_subcommand():
    proc = subprocess.run([sys.executable, '-m', 'psquared.cli', 'version'], capture_output=True, text=True)
    assert proc.returncode == 0
    assert proc.stdout.startswith('psquared ')


def test_pyproject_version_matches_fallback():
    pyproject = Path(__file__).parents[1] / "pyproject.toml"
    data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    import psquared
    assert data["project"]["version"] == psquared._FALLBACK_VERSION
