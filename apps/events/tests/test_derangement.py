import random

from django.test import SimpleTestCase

from apps.events.services.derangement import InvalidDerangementError
from apps.events.services.derangement import generate_derangement
from apps.events.services.derangement import validate_derangement


class GenerateDerangementTest(SimpleTestCase):
    def assertDerangement(self, ids, assignment):
        self.assertEqual(set(assignment), set(ids))
        self.assertEqual(sorted(assignment.values()), sorted(ids))
        for giver, receiver in assignment.items():
            self.assertNotEqual(giver, receiver)

    def test_valid_for_every_roster_size(self):
        for size in range(2, 51):
            with self.subTest(size=size):
                ids = list(range(100, 100 + size))
                assignment = generate_derangement(ids, rng=random.Random(size))
                self.assertDerangement(ids, assignment)

    def test_two_participants_swap(self):
        self.assertEqual(generate_derangement([7, 3], rng=random.Random(1)), {3: 7, 7: 3})

    def test_cycle_partition_fallback_is_valid(self):
        for size in range(2, 51):
            with self.subTest(size=size):
                ids = list(range(size))
                assignment = generate_derangement(ids, rng=random.Random(size), max_attempts=0)
                self.assertDerangement(ids, assignment)

    def test_same_seed_gives_same_assignment(self):
        ids = list(range(1, 11))

        first = generate_derangement(ids, rng=random.Random(42))
        second = generate_derangement(ids, rng=random.Random(42))

        self.assertEqual(first, second)

    def test_input_order_does_not_matter_for_a_seed(self):
        first = generate_derangement([1, 2, 3, 4], rng=random.Random(5))
        second = generate_derangement([4, 3, 2, 1], rng=random.Random(5))

        self.assertEqual(first, second)

    def test_every_receiver_is_reachable(self):
        rng = random.Random(0)
        seen = set()

        for _ in range(200):
            seen.add(generate_derangement([1, 2, 3], rng=rng)[1])

        self.assertEqual(seen, {2, 3})

    def test_fewer_than_two_ids_rejected(self):
        for ids in ([], [1]):
            with self.subTest(ids=ids), self.assertRaises(ValueError):
                generate_derangement(ids)

    def test_duplicate_ids_rejected(self):
        with self.assertRaises(ValueError):
            generate_derangement([1, 1, 2])


class ValidateDerangementTest(SimpleTestCase):
    def test_accepts_valid_assignment(self):
        validate_derangement([1, 2, 3], {1: 2, 2: 3, 3: 1})

    def test_rejects_self_assignment(self):
        with self.assertRaises(InvalidDerangementError):
            validate_derangement([1, 2, 3], {1: 1, 2: 3, 3: 2})

    def test_rejects_missing_giver(self):
        with self.assertRaises(InvalidDerangementError):
            validate_derangement([1, 2, 3], {1: 2, 2: 1})

    def test_rejects_duplicate_receiver(self):
        with self.assertRaises(InvalidDerangementError):
            validate_derangement([1, 2, 3], {1: 2, 2: 1, 3: 1})
