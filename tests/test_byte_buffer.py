import unittest
from netbuf.util.byte_buffer import ByteBuffer

class TestByteBuffer(unittest.TestCase):
    def setUp(self):
        self.buffer = ByteBuffer(b"abcdef")

    def test_initial_state(self):
        buffer = ByteBuffer()
        self.assertEqual(buffer.length(), 0)
        self.assertEqual(len(buffer), 0)
        self.assertEqual(buffer.available(), 0)
        self.assertEqual(buffer.position, 0)
        self.assertTrue(buffer.is_empty())
        self.assertTrue(buffer.at_end())

    def test_initial_content(self):
        self.assertEqual(self.buffer.length(), 6)
        self.assertEqual(self.buffer.available(), 6)
        self.assertFalse(self.buffer.is_empty())
        self.assertFalse(self.buffer.at_end())
        self.assertEqual(ByteBuffer("héllo").snapshot(), "héllo".encode('utf-8'))

    def test_append_keeps_position(self):
        buffer = ByteBuffer()
        result = buffer.append(b"hello")
        self.assertIs(result, buffer)
        self.assertEqual(buffer.length(), 5)
        self.assertEqual(buffer.available(), 5)
        self.assertEqual(buffer.position, 0)

        buffer.read(2)
        buffer.append(b" world")
        self.assertEqual(buffer.position, 2)
        self.assertEqual(buffer.available(), 9)

    def test_append_chaining(self):
        buffer = ByteBuffer().append(b"ab").append(bytearray(b"cd")).append(memoryview(b"ef"))
        self.assertEqual(buffer.snapshot(), b"abcdef")

    def test_write_multiple_chunks(self):
        buffer = ByteBuffer(b"x")
        buffer.read(1)
        result = buffer.write(b"\x00\xff", bytearray(b"\x80"), "é")
        self.assertIs(result, buffer)
        self.assertEqual(buffer.snapshot(), b"x\x00\xff\x80\xc3\xa9")
        self.assertEqual(buffer.position, 1)

    def test_int_input_is_rejected(self):
        with self.assertRaises(TypeError):
            self.buffer.append(3)
        with self.assertRaises(TypeError):
            self.buffer.write(b"ok", 2)
        with self.assertRaises(TypeError):
            ByteBuffer(5)
        self.assertEqual(self.buffer.snapshot(), b"abcdef")

    def test_available_after_position_change(self):
        # content "abcdef", position 2
        self.buffer.position = 2
        self.assertEqual(self.buffer.available(), 4)
        self.assertEqual(self.buffer.read(3), b"cde")
        self.assertEqual(self.buffer.position, 5)

    def test_read_clamps_to_available(self):
        self.buffer.read(4)
        self.assertEqual(self.buffer.read(10), b"ef")
        self.assertEqual(self.buffer.position, 6)
        self.assertTrue(self.buffer.at_end())
        self.assertEqual(self.buffer.read(1), b"")
        self.assertEqual(self.buffer.position, 6)

    def test_read_without_count_returns_remaining(self):
        self.buffer.read(1)
        self.assertEqual(self.buffer.read(), b"bcdef")
        self.assertEqual(self.buffer.available(), 0)

    def test_read_non_positive_count(self):
        self.buffer.read(2)
        self.assertEqual(self.buffer.read(0), b"")
        self.assertEqual(self.buffer.read(-3), b"")
        self.assertEqual(self.buffer.position, 2)

    def test_read_does_not_remove_content(self):
        self.buffer.read(3)
        self.assertEqual(self.buffer.length(), 6)
        self.buffer.reset()
        self.assertEqual(self.buffer.position, 0)
        self.assertEqual(self.buffer.read(), b"abcdef")

    def test_clear(self):
        self.buffer.read(3)
        self.buffer.clear()
        self.assertTrue(self.buffer.is_empty())
        self.assertEqual(self.buffer.position, 0)

    def test_consume_defaults_to_position(self):
        self.buffer.read(4)
        result = self.buffer.consume()
        self.assertIs(result, self.buffer)
        self.assertEqual(self.buffer.snapshot(), b"ef")
        self.assertEqual(self.buffer.position, 0)
        self.assertEqual(self.buffer.read(), b"ef")

    def test_consume_everything_clears(self):
        self.buffer.position = 3
        self.buffer.consume(6)
        self.assertEqual(self.buffer.length(), 0)
        self.assertEqual(self.buffer.position, 0)

        buffer = ByteBuffer(b"abc")
        buffer.consume(100)
        self.assertEqual(buffer.length(), 0)
        self.assertEqual(buffer.position, 0)

    def test_consume_partial(self):
        # content length 6, position 5
        self.buffer.position = 5
        self.buffer.consume(4)
        self.assertEqual(self.buffer.snapshot(), b"ef")
        self.assertEqual(self.buffer.position, 1)
        self.assertEqual(self.buffer.read(), b"f")

    def test_consume_past_position_clamps_to_zero(self):
        self.buffer.position = 1
        self.buffer.consume(4)
        self.assertEqual(self.buffer.snapshot(), b"ef")
        self.assertEqual(self.buffer.position, 0)

    def test_consume_non_positive_is_noop(self):
        self.buffer.position = 2
        self.buffer.consume(0)
        self.buffer.consume(-5)
        self.assertEqual(self.buffer.snapshot(), b"abcdef")
        self.assertEqual(self.buffer.position, 2)

        # default count is the position, which is 0 here
        fresh = ByteBuffer(b"abc")
        fresh.consume()
        self.assertEqual(fresh.snapshot(), b"abc")

    def test_snapshot_is_a_copy(self):
        snapshot = self.buffer.snapshot()
        self.assertIsInstance(snapshot, bytes)
        self.buffer.append(b"gh")
        self.assertEqual(snapshot, b"abcdef")
        self.assertEqual(bytes(self.buffer), b"abcdefgh")

    def test_fifo_order_across_appends_and_consumes(self):
        buffer = ByteBuffer()
        collected = b""
        for i in range(50):
            buffer.append(bytes([i]) * 3)
            collected += buffer.read(2)
            if i % 7 == 0:
                buffer.consume()
        collected += buffer.read()
        self.assertEqual(collected, b"".join(bytes([i]) * 3 for i in range(50)))

if __name__ == "__main__":
    unittest.main(verbosity=2)
