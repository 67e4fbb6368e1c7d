from __future__ import annotations

import os
import subprocess
import sys
import tempfile
import unittest
import zipfile
from pathlib import Path
from typing import Dict


def _build_fixture_tree(root: Path) -> Dict[str, bytes]:
    files: Dict[str, bytes] = {}
    (root / "inbox").mkdir()
    msg = "From: a@example.com\r\nSubject: hi\r\n\r\nhello\r\n"
    (root / "inbox" / "one.eml").write_bytes(msg.encode("utf-8"))
    files["inbox/one.eml"] = msg.encode("utf-8")
    other = "Subject: Grüße\r\n\r\nbody\r\n"
    (root / "two.eml").write_bytes(other.encode("utf-8"))
    files["two.eml"] = other.encode("utf-8")
    (root / "inbox" / "empty.eml").write_bytes(b"")
    files["inbox/empty.eml"] = b""
    return files


class CLIIntegrationTests(unittest.TestCase):
    def run_cli(self, args, *, expect: int | None = 0, cwd: Path | None = None):
        cmd = [sys.executable, "-m", "mailzip.cli"] + list(args)
        env = os.environ.copy()
        repo_root = Path(__file__).resolve().parent
        existing = env.get("PYTHONPATH", "")
        env["PYTHONPATH"] = str(repo_root) if not existing else f"{repo_root}{os.pathsep}{existing}"
        proc = subprocess.run(
            cmd,
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            env=env,
        )
        if expect is not None and proc.returncode != expect:
            raise AssertionError(
                f"CLI exited {proc.returncode}, expected {expect}\nCommand: {' '.join(cmd)}\nSTDOUT:\n{proc.stdout}\nSTDERR:\n{proc.stderr}"
            )
        return proc

    def test_pack_directory_roundtrip(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            src = root / "src"
            src.mkdir()
            expected = _build_fixture_tree(src)
            archive = root / "out.zip"
            proc = self.run_cli(["pack", str(archive), str(src)])
            self.assertIn("packing: inbox/one.eml", proc.stdout)
            self.assertIn("Done: 3 file(s)", proc.stdout)
            with zipfile.ZipFile(archive) as zf:
                self.assertIsNone(zf.testzip())
                self.assertEqual(zf.namelist(), ["two.eml", "inbox/empty.eml", "inbox/one.eml"])
                for name, data in expected.items():
                    self.assertEqual(zf.read(name), data)

    def test_pack_into_directory_uses_default_name(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            msg = root / "m.eml"
            msg.write_text("Subject: x\n\ny\n", encoding="utf-8")
            outdir = root / "out"
            outdir.mkdir()
            proc = self.run_cli(["pack", "--quiet", str(outdir), str(msg)])
            self.assertNotIn("packing:", proc.stdout)
            produced = list(outdir.iterdir())
            self.assertEqual(len(produced), 1)
            self.assertTrue(produced[0].name.startswith("emails_"))
            with zipfile.ZipFile(produced[0]) as zf:
                self.assertEqual(zf.namelist(), ["m.eml"])

    def test_repack_into_input_directory_skips_own_archive(self):
        with tempfile.TemporaryDirectory() as tmp:
            src = Path(tmp) / "src"
            src.mkdir()
            (src / "a.eml").write_text("Subject: a\n\nx\n", encoding="utf-8")
            (src / "b.eml").write_text("Subject: b\n\ny\n", encoding="utf-8")
            first = self.run_cli(["pack", "--quiet", str(src), str(src)])
            self.assertIn("Done: 2 file(s)", first.stdout)
            second = self.run_cli(["pack", "--quiet", str(src), str(src)])
            self.assertIn("Done: 2 file(s)", second.stdout)
            archives = [p for p in src.iterdir() if p.suffix == ".zip"]
            self.assertEqual(len(archives), 1)
            with zipfile.ZipFile(archives[0]) as zf:
                self.assertEqual(zf.namelist(), ["a.eml", "b.eml"])

            other = Path(tmp) / "other"
            other.mkdir()
            (other / "c.eml").write_text("Subject: c\n\nz\n", encoding="utf-8")
            explicit = other / "named.zip"
            self.run_cli(["pack", "--quiet", str(explicit), str(other)])
            self.run_cli(["pack", "--quiet", str(explicit), str(other)])
            with zipfile.ZipFile(explicit) as zf:
                self.assertEqual(zf.namelist(), ["c.eml"])

    def test_crc_and_data_url(self):
        with tempfile.TemporaryDirectory() as tmp:
            p = Path(tmp) / "check.txt"
            p.write_bytes(b"123456789")
            proc = self.run_cli(["crc", str(p)])
            self.assertEqual(proc.stdout.strip(), f"cbf43926\t{p}")
            proc = self.run_cli(["data-url", str(p)])
            self.assertEqual(proc.stdout.strip(), "data:application/octet-stream;base64,MTIzNDU2Nzg5")

    def test_errors_exit_2(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            proc = self.run_cli(["pack", str(root / "o.zip"), str(root / "missing.eml")], expect=2)
            self.assertIn("Error:", proc.stderr)
            bad = root / "bad.eml"
            bad.write_bytes(b"\xff\xfe not utf-8")
            proc = self.run_cli(["pack", str(root / "o.zip"), str(bad)], expect=2)
            self.assertIn("Error:", proc.stderr)
            self.assertFalse((root / "o.zip").exists())


if __name__ == "__main__":
    unittest.main()
