from __future__ import annotations

import threading
import unittest
import zlib

from mailzip import checksum
from mailzip.checksum import crc32, get_table


class CRC32Tests(unittest.TestCase):
    def test_known_vectors(self):
        self.assertEqual(crc32(b""), 0x00000000)
        self.assertEqual(crc32(b"123456789"), 0xCBF43926)
        self.assertEqual(crc32(b"The quick brown fox jumps over the lazy dog"), 0x414FA339)

    def test_matches_zlib(self):
        samples = [b"a", b"hi", bytes(range(256)), b"\xff" * 1000, "Grüße".encode("utf-8")]
        for data in samples:
            self.assertEqual(crc32(data), zlib.crc32(data) & 0xFFFFFFFF)

    def test_idempotent_and_accepts_buffers(self):
        data = b"Subject: hello\r\n\r\nbody\r\n"
        first = crc32(data)
        self.assertEqual(crc32(data), first)
        self.assertEqual(crc32(bytearray(data)), first)
        self.assertEqual(crc32(memoryview(data)), first)

    def test_incremental(self):
        a, b = b"123", b"456789"
        self.assertEqual(crc32(b, crc32(a)), crc32(a + b))

    def test_table_shape(self):
        tbl = get_table()
        self.assertEqual(len(tbl), 256)
        self.assertEqual(tbl[0], 0)
        self.assertEqual(tbl[1], 0x77073096)
        self.assertEqual(tbl[255], 0x2D02EF8D)
        self.assertIs(get_table(), tbl)

    def test_concurrent_first_use(self):
        saved = checksum._TABLE
        checksum._TABLE = None
        self.addCleanup(setattr, checksum, "_TABLE", saved)
        results = []
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            results.append((get_table(), crc32(b"123456789")))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertEqual(len(results), 8)
        first_tbl = results[0][0]
        for tbl, value in results:
            self.assertIs(tbl, first_tbl)
            self.assertEqual(value, 0xCBF43926)
        self.assertEqual(first_tbl, checksum._make_table())


if __name__ == "__main__":
    unittest.main()
