import unittest
from cbor2 import CBORTag, dumps
from linear_vesting.errors import UnknownAction, WrongStateRepresentation
from linear_vesting.state import Claim, Refund, VestingState, decode_action
from tests.helpers import BENEFICIARY, OWNER, make_state

class TestVestingState(unittest.TestCase):

    def setUp(self):
        """Set up test fixtures"""
        self.state = make_state(claimed_quantity=250)

    def test_create_starts_unclaimed(self):
        state = VestingState.create(OWNER, BENEFICIARY, 1000, 2000, 3000, 1000)
        self.assertEqual(state.claimed_quantity, 0)
        self.assertEqual(state.remaining(), 1000)
        self.assertEqual(state, make_state())

    def test_with_claimed_returns_new_value(self):
        """Continuation state is a copy; the original keeps its progress"""
        continued = self.state.with_claimed(100)
        self.assertIsNot(continued, self.state)
        self.assertEqual(continued.claimed_quantity, 350)
        self.assertEqual(self.state.claimed_quantity, 250)
        self.assertEqual(continued.schedule_fields(), self.state.schedule_fields())

    def test_schedule_fields_exclude_progress(self):
        self.assertEqual(
            self.state.schedule_fields(),
            (OWNER, BENEFICIARY, 1000, 2000, 3000, 1000),
        )

    def test_remaining(self):
        self.assertEqual(self.state.remaining(), 750)

    def test_unordered_schedule_is_accepted(self):
        """Schedule ordering is a precondition of whoever locks the funds"""
        state = make_state(start_time=3000, cliff_date=1000, end_date=2000)
        self.assertEqual(state.start_time, 3000)

    def test_cbor_encoding(self):
        encoded = self.state.to_cbor()
        self.assertIsInstance(encoded, bytes)
        self.assertEqual(VestingState.decode(encoded), self.state)
        self.assertEqual(VestingState.decode(self.state.to_cbor_hex()), self.state)

    def test_decode_passes_instances_through(self):
        self.assertIs(VestingState.decode(self.state), self.state)

    def test_decode_rejects_other_shapes(self):
        for raw in (b"\x01", "zz", 17, None, Claim(5)):
            with self.assertRaises(WrongStateRepresentation):
                VestingState.decode(raw)

    def test_decode_rejects_truncated_cbor(self):
        for raw in (bytes.fromhex("d8799f"), "d8799f", self.state.to_cbor()[:-1]):
            with self.assertRaises(WrongStateRepresentation):
                VestingState.decode(raw)

    def test_decode_rejects_extra_fields(self):
        """A record with a trailing field is not a vesting state"""
        extended = dumps(CBORTag(121, [OWNER, BENEFICIARY, 1000, 2000, 3000, 1000, 0, 99]))
        with self.assertRaises(WrongStateRepresentation):
            VestingState.decode(extended)

        short = dumps(CBORTag(121, [OWNER, BENEFICIARY, 1000, 2000, 3000, 1000]))
        with self.assertRaises(WrongStateRepresentation):
            VestingState.decode(short)

class TestActions(unittest.TestCase):

    def test_constructor_ids(self):
        self.assertEqual(Claim.CONSTR_ID, 0)
        self.assertEqual(Refund.CONSTR_ID, 1)

    def test_decode_action(self):
        self.assertEqual(decode_action(Claim(40).to_cbor()), Claim(40))
        self.assertEqual(decode_action(Refund().to_cbor_hex()), Refund())

        refund = Refund()
        self.assertIs(decode_action(refund), refund)

    def test_encodings_differ(self):
        self.assertNotEqual(Claim(0).to_cbor(), Refund().to_cbor())

    def test_decode_unknown_action(self):
        for raw in (b"\x01", "nothex", 3.5, make_state()):
            with self.assertRaises(UnknownAction):
                decode_action(raw)

    def test_decode_truncated_action(self):
        for raw in (bytes.fromhex("d8799f"), "d8799f", Claim(40).to_cbor()[:-1]):
            with self.assertRaises(UnknownAction):
                decode_action(raw)

    def test_decode_action_with_extra_fields(self):
        for raw in (dumps(CBORTag(121, [1, 2, 3, 4, 5, 6, 7])), dumps(CBORTag(122, [0]))):
            with self.assertRaises(UnknownAction):
                decode_action(raw)
        self.assertEqual(decode_action(dumps(CBORTag(121, [7]))), Claim(7))

if __name__ == '__main__':
    unittest.main()
