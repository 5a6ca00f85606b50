# test_sha1sum.py
# Command line tool test

import contextlib
import errno
import hashlib
import io
import os
import tempfile
import unittest
from unittest import mock

import sha1sum
from sha1_engine import hash_file
from sha1_utils import DigestInputError


def fake_stdin(data: bytes) -> io.TextIOWrapper:
    return io.TextIOWrapper(io.BytesIO(data))


class FailingCloseStream(io.BytesIO):
    def close(self):
        super().close()
        raise OSError(errno.EIO, os.strerror(errno.EIO))


class Sha1sumTest(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def make_file(self, name: str, content: bytes) -> str:
        path = os.path.join(self.tmp.name, name)
        with open(path, "wb") as f:
            f.write(content)
        return path

    def run_main(self, argv, stdin: bytes = b""):
        out, err = io.StringIO(), io.StringIO()
        with mock.patch("sys.stdin", fake_stdin(stdin)), contextlib.redirect_stdout(
            out
        ), contextlib.redirect_stderr(err):
            status = sha1sum.main(argv)
        return status, out.getvalue(), err.getvalue()

    def test_reads_stdin_without_arguments(self):
        status, out, err = self.run_main([], stdin=b"abc")
        self.assertEqual(status, 0)
        self.assertEqual(out, "a9993e364706816aba3e25717850c26c9cd0d89d  -\n")
        self.assertEqual(err, "")

    def test_dash_means_stdin(self):
        path = self.make_file("a.txt", b"")
        status, out, _ = self.run_main([path, "-"], stdin=b"abc")
        self.assertEqual(status, 0)
        self.assertEqual(
            out.splitlines(),
            [
                f"da39a3ee5e6b4b0d3255bfef95601890afd80709  {path}",
                "a9993e364706816aba3e25717850c26c9cd0d89d  -",
            ],
        )

    def test_one_line_per_file_in_argument_order(self):
        contents = {"b.bin": bytes(64), "a.bin": b"x" * 60, "c.bin": os.urandom(1000)}
        paths = [self.make_file(name, data) for name, data in contents.items()]
        status, out, _ = self.run_main(paths)
        self.assertEqual(status, 0)
        expected = [
            f"{hashlib.sha1(data).hexdigest()}  {path}"
            for path, data in zip(paths, contents.values())
        ]
        self.assertEqual(out.splitlines(), expected)

    def test_missing_file_is_reported_and_others_still_hashed(self):
        good = self.make_file("good.txt", b"abc")
        missing = os.path.join(self.tmp.name, "missing.txt")
        status, out, err = self.run_main([missing, good])
        self.assertEqual(status, 1)
        self.assertEqual(out, f"a9993e364706816aba3e25717850c26c9cd0d89d  {good}\n")
        self.assertTrue(err.startswith(f"sha1sum: {missing}: "))

    def test_directory_cannot_be_digested(self):
        status, out, err = self.run_main([self.tmp.name])
        self.assertEqual(status, 1)
        self.assertEqual(out, "")
        self.assertIn(self.tmp.name, err)

    def test_string_option(self):
        status, out, _ = self.run_main(["-s", "abc", "--string", ""])
        self.assertEqual(status, 0)
        self.assertEqual(
            out.splitlines(),
            [
                'a9993e364706816aba3e25717850c26c9cd0d89d  "abc"',
                'da39a3ee5e6b4b0d3255bfef95601890afd80709  ""',
            ],
        )

    def test_string_option_hashes_raw_argument_bytes(self):
        text = os.fsdecode(b"\xff")
        status, out, _ = self.run_main(["-s", text])
        self.assertEqual(status, 0)
        expected = hashlib.sha1(b"\xff").hexdigest()
        self.assertEqual(expected, "85e53271e14006f0265921d02d4d736cdc580b0b")
        self.assertEqual(out, f'{expected}  "{text}"\n')

    def test_close_failure_is_reported(self):
        path = self.make_file("a.txt", b"abc")
        with mock.patch("sha1_engine.open", create=True, return_value=FailingCloseStream(b"abc")):
            status, out, err = self.run_main([path])
        self.assertEqual(status, 1)
        self.assertEqual(out, "")
        self.assertEqual(err, f"sha1sum: {path}: {os.strerror(errno.EIO)}\n")

    def test_stdin_is_not_closed(self):
        stdin = fake_stdin(b"abc")
        with mock.patch("sys.stdin", stdin), contextlib.redirect_stdout(io.StringIO()):
            sha1sum.main(["-"])
        self.assertFalse(stdin.closed)


class HashFileTest(unittest.TestCase):
    def test_hash_file(self):
        with tempfile.NamedTemporaryFile(delete=False) as f:
            f.write(b"abc")
        self.addCleanup(os.unlink, f.name)
        self.assertEqual(hash_file(f.name), "a9993e364706816aba3e25717850c26c9cd0d89d")

    def test_close_failure_names_the_file(self):
        with mock.patch("sha1_engine.open", create=True, return_value=FailingCloseStream(b"abc")):
            with self.assertRaises(DigestInputError) as ctx:
                hash_file("input.bin")
        self.assertEqual(ctx.exception.filename, "input.bin")
        self.assertEqual(ctx.exception.errno, errno.EIO)

    def test_open_failure_names_the_file(self):
        with self.assertRaises(DigestInputError) as ctx:
            hash_file("/nonexistent/sha1sum/input")
        self.assertEqual(ctx.exception.filename, "/nonexistent/sha1sum/input")
        self.assertIsInstance(ctx.exception, OSError)


if __name__ == "__main__":
    unittest.main()
