"""Tests for Directory and File tree primitives."""

import unittest

from treefs.exceptions import (
    AmbiguousPathError,
    CannotUpdateRootError,
    DirectoryExistsError,
    InvalidMoveError,
)
from treefs.filesystem.nodes import Directory, File, NodeType, byte_length, node_path


class TestNodePaths(unittest.TestCase):
    """Test path derivation from parent links."""

    def test_root_path(self):
        root = Directory('/')
        self.assertEqual(root.get_path(), '/')
        self.assertTrue(root.is_root)

    def test_nested_paths(self):
        root = Directory('/')
        a = root.create_and_add_directory('a')
        b = a.create_and_add_directory('b')
        f = b.create_and_add_file('f')

        self.assertEqual(node_path(a), '/a')
        self.assertEqual(b.get_path(), '/a/b')
        self.assertEqual(f.get_path(), '/a/b/f')
        self.assertIs(f.node_type, NodeType.FILE)


class TestDirectory(unittest.TestCase):
    """Test directory collections and mutation primitives."""

    def setUp(self):
        self.root = Directory('/')

    def test_create_rejects_reserved_names(self):
        for name in ('/', '.', '..'):
            with self.assertRaises(DirectoryExistsError):
                self.root.create_and_add_directory(name)
        with self.assertRaises(AmbiguousPathError):
            self.root.create_and_add_file('..')

    def test_directory_and_file_cannot_share_a_name(self):
        self.root.create_and_add_directory('x')
        with self.assertRaises(AmbiguousPathError):
            self.root.create_and_add_file('x')

        self.root.create_and_add_file('y')
        with self.assertRaises(AmbiguousPathError):
            self.root.create_and_add_directory('y')

        self.assertTrue(self.root.has_directory('x'))
        self.assertFalse(self.root.has_file('x'))
        self.assertTrue(self.root.has_file('y'))
        self.assertFalse(self.root.has_directory('y'))

    def test_add_replaces_same_kind(self):
        first = self.root.create_and_add_directory('d')
        first.create_and_add_file('inner')
        second = self.root.create_and_add_directory('d')

        self.assertIsNot(first, second)
        self.assertIs(self.root.directories['d'], second)
        self.assertEqual(second.files, {})

        old = self.root.create_and_add_file('f', 'old')
        new = self.root.create_and_add_file('f')
        self.assertIs(self.root.files['f'], new)
        self.assertIsNot(old, new)

    def test_add_sets_parent(self):
        other = Directory('/')
        child = other.create_and_add_directory('c')
        self.root.add_directory(child)
        self.assertIs(child.parent, self.root)

    def test_remove_is_noop_when_absent(self):
        self.root.remove_directory('missing')
        self.root.remove_file('missing')
        with self.assertRaises(CannotUpdateRootError):
            self.root.remove_directory('/')

    def test_remove_with_expected_checks_identity(self):
        d = self.root.create_and_add_directory('d')
        self.root.remove_directory('d', expected=Directory('d', parent=self.root))
        self.assertIs(self.root.directories['d'], d)
        self.root.remove_directory('d', expected=d)
        self.assertFalse(self.root.has_directory('d'))

    def test_total_byte_count(self):
        a = self.root.create_and_add_directory('a')
        b = a.create_and_add_directory('b')
        self.root.create_and_add_file('one', 'x')
        a.create_and_add_file('two', b'yy')
        b.create_and_add_file('three', 'zzz')
        b.create_and_add_file('empty')

        self.assertEqual(self.root.get_total_byte_count(), 6)
        self.assertEqual(a.get_total_byte_count(), 5)
        self.assertEqual(b.get_total_byte_count(), 3)

    def test_iterators(self):
        a = self.root.create_and_add_directory('a')
        a.create_and_add_directory('b')
        a.create_and_add_file('f')
        self.root.create_and_add_file('g')

        self.assertEqual([d.name for d in self.root.iter_directories()], ['a', 'b'])
        self.assertEqual(sorted(f.name for f in self.root.iter_files()), ['f', 'g'])


class TestDirectoryUpdate(unittest.TestCase):
    """Test Directory.update rename/reparent."""

    def setUp(self):
        self.root = Directory('/')
        self.a = self.root.create_and_add_directory('a')
        self.b = self.root.create_and_add_directory('b')

    def test_rename(self):
        self.a.update(name='c')
        self.assertEqual(sorted(self.root.directories), ['b', 'c'])
        self.assertEqual(self.a.get_path(), '/c')

    def test_same_name_keeps_entry(self):
        self.a.update(name='a')
        self.assertIs(self.root.directories['a'], self.a)

    def test_reparent(self):
        self.a.update(parent=self.b)
        self.assertEqual(list(self.root.directories), ['b'])
        self.assertIs(self.b.directories['a'], self.a)
        self.assertEqual(self.a.get_path(), '/b/a')

    def test_root_cannot_be_updated(self):
        with self.assertRaises(CannotUpdateRootError):
            self.root.update(name='x')

    def test_file_collision(self):
        self.b.create_and_add_file('a')
        with self.assertRaises(AmbiguousPathError):
            self.a.update(parent=self.b)
        self.assertIs(self.a.parent, self.root)
        self.assertIn('a', self.root.directories)

    def test_cannot_move_into_descendant(self):
        inner = self.a.create_and_add_directory('inner')
        with self.assertRaises(InvalidMoveError):
            self.a.update(parent=inner)
        with self.assertRaises(InvalidMoveError):
            self.a.update(parent=self.a)


class TestFile(unittest.TestCase):
    """Test file content and update."""

    def setUp(self):
        self.root = Directory('/')

    def test_content_byte_length(self):
        f = File('f', parent=self.root)
        self.assertIsNone(f.content)
        self.assertIsNone(f.content_byte_length)

        f.set_content('héllo')
        self.assertEqual(f.content_byte_length, 6)
        f.set_content(b'\x00\x01')
        self.assertEqual(f.content_byte_length, 2)
        self.assertEqual(byte_length(''), 0)

    def test_update_rename_and_content(self):
        f = self.root.create_and_add_file('f', 'abc')
        f.update(name='g', content='abcd')

        self.assertEqual(list(self.root.files), ['g'])
        self.assertEqual(f.content, 'abcd')
        self.assertEqual(f.content_byte_length, 4)

    def test_update_same_name_keeps_entry(self):
        f = self.root.create_and_add_file('f')
        f.update(name='f')
        self.assertIs(self.root.files['f'], f)

    def test_update_reparent_replaces(self):
        d = self.root.create_and_add_directory('d')
        existing = d.create_and_add_file('f', 'old')
        f = self.root.create_and_add_file('f', 'new')

        f.update(parent=d)

        self.assertEqual(self.root.files, {})
        self.assertIs(d.files['f'], f)
        self.assertIsNot(d.files['f'], existing)

    def test_update_directory_collision(self):
        d = self.root.create_and_add_directory('d')
        d.create_and_add_directory('f')
        f = self.root.create_and_add_file('f')

        with self.assertRaises(AmbiguousPathError):
            f.update(parent=d)
        self.assertIs(self.root.files['f'], f)
        self.assertIs(f.parent, self.root)


if __name__ == '__main__':
    unittest.main()
