from __future__ import annotations

import os
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def literal(offset: int, data: bytes) -> bytes:
    return offset.to_bytes(3, "big") + len(data).to_bytes(2, "big") + data


def fill(offset: int, length: int, value: int) -> bytes:
    return offset.to_bytes(3, "big") + b"\x00\x00" + length.to_bytes(2, "big") + bytes((value,))


def ips(*chunks: bytes) -> bytes:
    return b"PATCH" + b"".join(chunks) + b"EOF"


@dataclass(slots=True)
class PatchWorkspace:
    """Fixture payload holding a base ROM and a patch on disk."""

    root: Path
    base_path: Path
    patch_path: Path

    def write_patch(self, *chunks: bytes) -> Path:
        self.patch_path.write_bytes(ips(*chunks))
        return self.patch_path

    def run_cli(self, *args: str) -> subprocess.CompletedProcess[str]:
        """Invoke ``python -m ribs.cli`` with the provided arguments."""

        env = os.environ.copy()
        pythonpath = str(SRC)
        if env.get("PYTHONPATH"):
            pythonpath = os.pathsep.join([pythonpath, env["PYTHONPATH"]])
        env["PYTHONPATH"] = pythonpath

        command = [sys.executable, "-m", "ribs.cli", *args]
        return subprocess.run(  # noqa: S603 - command constructed from known values
            command,
            cwd=self.root,
            env=env,
            capture_output=True,
            text=True,
            check=False,
        )


@pytest.fixture()
def workspace(tmp_path: Path) -> PatchWorkspace:
    """Create a directory with a five byte base ROM and a one-record patch."""

    root = tmp_path / "rom"
    root.mkdir()
    base_path = root / "base.bin"
    base_path.write_bytes(b"XXXXX")
    patch_path = root / "fix.ips"
    patch_path.write_bytes(ips(literal(1, b"abc")))
    return PatchWorkspace(root=root, base_path=base_path, patch_path=patch_path)

