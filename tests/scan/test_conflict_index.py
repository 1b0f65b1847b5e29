"""Tests for ConflictIndex."""
import unittest

from jarconflict.scan.conflict_index import ConflictIndex


class ConflictIndexTest(unittest.TestCase):
    def test_add_creates_levels(self):
        index = ConflictIndex()
        index.add('a/Foo.class', 10, 'a.jar')

        self.assertIn('a/Foo.class', index)
        self.assertEqual({10: ['a.jar']}, index['a/Foo.class'])
        self.assertEqual(1, len(index))

    def test_names_iterate_in_lexical_order(self):
        index = ConflictIndex()
        for name in ['org/Z.class', 'com/B.class', 'com/A.class', 'net/M.class']:
            index.add(name, 0, 'a.jar')

        self.assertEqual(['com/A.class', 'com/B.class', 'net/M.class', 'org/Z.class'], list(index))
        self.assertEqual(list(index), [name for name, _ in index.items()])

    def test_names_added_after_iteration_are_ordered(self):
        index = ConflictIndex()
        index.add('net/M.class', 0, 'a.jar')
        index.add('com/B.class', 0, 'a.jar')
        self.assertEqual(['com/B.class', 'net/M.class'], list(index))

        index.add('org/Z.class', 0, 'b.jar')
        index.add('com/A.class', 0, 'b.jar')
        index.add('com/B.class', 0, 'b.jar')

        self.assertEqual(['com/A.class', 'com/B.class', 'net/M.class', 'org/Z.class'], list(index))
        self.assertEqual(list(index), [name for name, _ in index.items()])
        self.assertEqual(4, len(index))

    def test_buckets_keep_insertion_order(self):
        index = ConflictIndex()
        index.add('Foo.class', 30, 'c.jar')
        index.add('Foo.class', 10, 'a.jar')
        index.add('Foo.class', 30, 'b.jar')

        self.assertEqual([(30, ['c.jar', 'b.jar']), (10, ['a.jar'])], list(index['Foo.class'].items()))

    def test_repeated_observation_is_kept(self):
        """The same (name, identity, label) recorded twice lengthens the list."""
        index = ConflictIndex()
        index.add('Foo.class', 10, 'a.jar')
        index.add('Foo.class', 10, 'a.jar')

        self.assertEqual({10: ['a.jar', 'a.jar']}, index['Foo.class'])
        self.assertEqual(2, index.occurrences('Foo.class'))

    def test_occurrences(self):
        index = ConflictIndex()
        index.add('Foo.class', 10, 'a.jar')
        index.add('Foo.class', 20, 'b.jar')
        index.add('Foo.class', 20, 'c.jar')

        self.assertEqual(3, index.occurrences('Foo.class'))
        self.assertEqual(0, index.occurrences('Bar.class'))

    def test_merge_appends_after_existing(self):
        first = ConflictIndex()
        first.add('Foo.class', 10, 'a.jar')
        second = ConflictIndex()
        second.add('Foo.class', 10, 'b.jar')
        second.add('Foo.class', 20, 'b.jar')
        second.add('Bar.class', 5, 'b.jar')

        first.merge(second)

        self.assertEqual(['Bar.class', 'Foo.class'], list(first))
        self.assertEqual([(10, ['a.jar', 'b.jar']), (20, ['b.jar'])], list(first['Foo.class'].items()))

    def test_equality_is_order_sensitive(self):
        a = ConflictIndex()
        a.add('Foo.class', 10, 'a.jar')
        a.add('Foo.class', 10, 'b.jar')
        b = ConflictIndex()
        b.add('Foo.class', 10, 'b.jar')
        b.add('Foo.class', 10, 'a.jar')
        c = ConflictIndex()
        c.add('Foo.class', 10, 'a.jar')
        c.add('Foo.class', 10, 'b.jar')

        self.assertNotEqual(a, b)
        self.assertEqual(a, c)


if __name__ == '__main__':
    unittest.main()
