import threading

from django.test import SimpleTestCase

from apps.verification.choices import Channel
from apps.verification.choices import Purpose
from apps.verification.delivery import RecordingCodeDelivery
from apps.verification.results import VerifyFailure
from apps.verification.services import CodeIssuer
from apps.verification.services import CodeVerifier
from apps.verification.stores import CodeKey
from apps.verification.stores import InMemoryCodeStore

from .utils import FakeClock
from .utils import LosingStore
from .utils import wrong_code

EMAIL = 'ana@example.com'
KEY = CodeKey(EMAIL, Channel.EMAIL.value, Purpose.LOGIN.value)


class CodeVerifierTest(SimpleTestCase):
    """Verification outcomes and their precedence"""

    def setUp(self):
        self.clock = FakeClock()
        self.store = InMemoryCodeStore()
        self.delivery = RecordingCodeDelivery()
        self.issuer = CodeIssuer(
            store=self.store, delivery=self.delivery, ttl_seconds=600, cooldown_seconds=30, clock=self.clock
        )
        self.verifier = CodeVerifier(store=self.store, max_attempts=5, clock=self.clock)

    def issue(self, identifier=EMAIL, channel=Channel.EMAIL, purpose=Purpose.LOGIN, subject=''):
        self.issuer.issue(identifier, channel, purpose, subject=subject)
        return self.delivery.last_code()

    def verify(self, code, identifier=EMAIL, channel=Channel.EMAIL, purpose=Purpose.LOGIN):
        return self.verifier.verify(identifier, channel, purpose, code)

    def test_correct_code_succeeds_once(self):
        code = self.issue()

        first = self.verify(code)
        second = self.verify(code)

        self.assertTrue(first.success)
        self.assertEqual(first.identifier, EMAIL)
        self.assertFalse(second.success)
        self.assertEqual(second.reason, VerifyFailure.ALREADY_CONSUMED)
        self.assertTrue(self.store.get(KEY).consumed)

    def test_unknown_key_is_not_found(self):
        result = self.verify('123456')

        self.assertEqual(result.reason, VerifyFailure.NOT_FOUND)

    def test_codes_are_scoped_to_purpose(self):
        code = self.issue()

        result = self.verify(code, purpose=Purpose.PHONE_VERIFY)

        self.assertEqual(result.reason, VerifyFailure.NOT_FOUND)

    def test_identifier_is_normalized_on_verify(self):
        code = self.issue()

        self.assertTrue(self.verify(code, identifier=' Ana@EXAMPLE.com').success)

    def test_code_is_valid_until_ttl_then_expires(self):
        code = self.issue()
        self.clock.advance(600)
        self.assertTrue(self.verify(code).success)

        code = self.issue()
        self.clock.advance(601)
        result = self.verify(code)

        self.assertEqual(result.reason, VerifyFailure.EXPIRED)
        self.assertFalse(self.store.get(KEY).consumed)

    def test_wrong_code_counts_attempts(self):
        code = self.issue()

        results = [self.verify(wrong_code(code)) for _ in range(5)]

        self.assertTrue(all(r.reason == VerifyFailure.INVALID_CODE for r in results))
        self.assertEqual([r.attempts_remaining for r in results], [4, 3, 2, 1, 0])
        self.assertEqual(self.store.get(KEY).attempts, 5)

    def test_correct_code_is_refused_after_max_attempts(self):
        code = self.issue()
        for _ in range(5):
            self.verify(wrong_code(code))

        result = self.verify(code)

        self.assertEqual(result.reason, VerifyFailure.ATTEMPTS_EXCEEDED)
        self.assertEqual(self.store.get(KEY).attempts, 5)

    def test_consumed_takes_precedence_over_expired(self):
        code = self.issue()
        self.verify(code)
        self.clock.advance(3600)

        self.assertEqual(self.verify(code).reason, VerifyFailure.ALREADY_CONSUMED)

    def test_expired_takes_precedence_over_attempts(self):
        code = self.issue()
        for _ in range(5):
            self.verify(wrong_code(code))
        self.clock.advance(601)

        self.assertEqual(self.verify(code).reason, VerifyFailure.EXPIRED)

    def test_subject_is_returned_on_success(self):
        code = self.issue('11987654321', Channel.WHATSAPP, Purpose.PHONE_VERIFY, subject='7')

        result = self.verify(code, '(11) 98765-4321', Channel.WHATSAPP, Purpose.PHONE_VERIFY)

        self.assertTrue(result.success)
        self.assertEqual(result.subject, '7')

    def test_lost_swap_is_retried_once(self):
        store = LosingStore(losses=0)
        issuer = CodeIssuer(store=store, delivery=self.delivery, ttl_seconds=600, cooldown_seconds=30, clock=self.clock)
        issuer.issue(EMAIL, Channel.EMAIL, Purpose.LOGIN)
        store.losses = 1

        result = CodeVerifier(store=store, max_attempts=5, clock=self.clock).verify(
            EMAIL, Channel.EMAIL, Purpose.LOGIN, self.delivery.last_code()
        )

        self.assertTrue(result.success)

    def test_two_lost_swaps_report_concurrent_modification(self):
        store = LosingStore(losses=0)
        issuer = CodeIssuer(store=store, delivery=self.delivery, ttl_seconds=600, cooldown_seconds=30, clock=self.clock)
        issuer.issue(EMAIL, Channel.EMAIL, Purpose.LOGIN)
        store.losses = 2

        result = CodeVerifier(store=store, max_attempts=5, clock=self.clock).verify(
            EMAIL, Channel.EMAIL, Purpose.LOGIN, self.delivery.last_code()
        )

        self.assertEqual(result.reason, VerifyFailure.CONCURRENT_MODIFICATION)
        self.assertFalse(store.get(KEY).consumed)

    def test_concurrent_verifications_succeed_at_most_once(self):
        code = self.issue()
        results = []
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            results.append(self.verify(code))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(sum(1 for r in results if r.success), 1)
        self.assertEqual(len(results), 8)

    def test_concurrent_wrong_guesses_never_exceed_max_attempts(self):
        code = self.issue()
        barrier = threading.Barrier(10)

        def worker():
            barrier.wait()
            self.verify(wrong_code(code))

        threads = [threading.Thread(target=worker) for _ in range(10)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertLessEqual(self.store.get(KEY).attempts, 5)
