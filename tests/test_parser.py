"""Tests for the line buffer and in-place tokenizer."""

import unittest

from minish.shell.parser import LineBuffer, LineTokenizer, NUL


def tokenize(line: str, capacity: int = 256):
    buffer = LineBuffer(capacity)
    buffer.fill(line.encode())
    buffer.strip_newline()
    return buffer, LineTokenizer().tokenize(buffer)


class TestLineBuffer(unittest.TestCase):
    """Test the fixed-capacity line buffer."""
    
    def test_fill_and_text(self):
        buffer = LineBuffer(16)
        self.assertEqual(buffer.fill(b"ls -l\n"), 6)
        self.assertEqual(buffer.length, 6)
        buffer.strip_newline()
        self.assertEqual(buffer.text(), "ls -l")
        self.assertEqual(buffer.data[5], NUL)
    
    def test_newline_only_stripped_at_end(self):
        buffer = LineBuffer(16)
        buffer.fill(b"abc")
        buffer.strip_newline()
        self.assertEqual(buffer.text(), "abc")
    
    def test_fill_overwrites_previous_line(self):
        buffer = LineBuffer(16)
        buffer.fill(b"a long line\n")
        buffer.fill(b"ls\n")
        buffer.strip_newline()
        self.assertEqual(buffer.text(), "ls")
    
    def test_fill_rejects_oversized_chunk(self):
        buffer = LineBuffer(4)
        with self.assertRaises(ValueError):
            buffer.fill(b"hello")
    
    def test_nul_byte_ends_line(self):
        buffer = LineBuffer(16)
        buffer.fill(b"ab\x00cd\n")
        self.assertEqual(buffer.text(), "ab")
    
    def test_capacity_must_be_positive(self):
        with self.assertRaises(ValueError):
            LineBuffer(0)


class TestLineTokenizer(unittest.TestCase):
    """Test tokenization."""
    
    def test_single_token(self):
        _, args = tokenize("foo")
        self.assertEqual(args.argc, 1)
        self.assertEqual(args.tokens(), ["foo"])
    
    def test_spaces_separate_tokens(self):
        line = "cp one two three"
        _, args = tokenize(line)
        self.assertEqual(args.argc, 4)
        self.assertEqual(" ".join(args), line)
    
    def test_spaces_replaced_in_place(self):
        buffer, args = tokenize("a b c\n")
        self.assertEqual(bytes(buffer.data[:5]), b"a\x00b\x00c")
        self.assertEqual(args.offsets, [0, 2, 4])
    
    def test_comment_truncates_line(self):
        _, with_comment = tokenize("ls -l # list files")
        _, without = tokenize("ls -l ")
        self.assertEqual(with_comment.argc, 3)
        self.assertEqual(with_comment.tokens(), without.tokens())
        self.assertEqual(with_comment.tokens(), ["ls", "-l", ""])
    
    def test_comment_only_line(self):
        _, args = tokenize("# nothing here\n")
        self.assertEqual(args.argc, 1)
        self.assertEqual(args.command, "")
    
    def test_consecutive_spaces_not_merged(self):
        _, args = tokenize("echo  a   b")
        self.assertEqual(args.tokens(), ["echo", "", "a", "", "", "b"])
    
    def test_empty_line_has_one_empty_token(self):
        _, args = tokenize("\n")
        self.assertEqual(args.argc, 1)
        self.assertEqual(args.tokens(), [""])
    
    def test_indexing(self):
        _, args = tokenize("cd /tmp")
        self.assertEqual(args[0], "cd")
        self.assertEqual(args[1], "/tmp")
        self.assertEqual(args[-1], "/tmp")
        with self.assertRaises(IndexError):
            args[2]
    
    def test_custom_comment_marker(self):
        buffer = LineBuffer()
        buffer.fill(b"ls ; ignored")
        args = LineTokenizer(comment_char=';').tokenize(buffer)
        self.assertEqual(args.tokens(), ["ls", ""])
    
    def test_vector_invalid_after_refill(self):
        buffer, args = tokenize("ls -l")
        buffer.fill(b"pwd")
        with self.assertRaises(RuntimeError):
            args.tokens()


if __name__ == '__main__':
    unittest.main()
