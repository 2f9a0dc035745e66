import json
import os
import unittest
from unittest.mock import patch

# Keep env-driven rule defaults out of these tests before importing app
for _var in ("MORRIS_TOKENS", "MORRIS_ALLOW_FLYING", "MORRIS_CHECK_CHECKMATE"):
    os.environ.pop(_var, None)

from app import app as flask_app  # noqa: E402
from morris_core.board import IllegalStateError  # noqa: E402


class TestFlaskAPI(unittest.TestCase):
    def setUp(self):
        self.client = flask_app.test_client()

    def _post(self, url, payload):
        return self.client.post(url, data=json.dumps(payload), content_type="application/json")

    def _new(self, **cfg):
        r = self._post("/api/new", cfg)
        self.assertEqual(r.status_code, 200)
        return r.get_json()

    def _click(self, state, ring, index):
        r = self._post("/api/click", {"state": state, "position": [ring, index]})
        self.assertEqual(r.status_code, 200)
        return r.get_json()

    def test_given_new_game_when_requested_then_empty_board_and_redraw(self):
        data = self._new()
        self.assertTrue(data["ok"])
        state = data["state"]
        self.assertEqual(state["board"], "." * 24)
        self.assertEqual(state["phase"], "PLACING")
        self.assertEqual(state["currentPlayer"], "PLAYER_A")
        self.assertEqual(state["toPlace"], {"PLAYER_A": 9, "PLAYER_B": 9})
        self.assertEqual(state["config"], {"tokensPerPlayer": 9, "allowFlying": False, "checkCheckmate": True})
        types = [n["type"] for n in data["notifications"]]
        self.assertEqual(types.count("ownership"), 24)
        self.assertEqual(types[-1], "prompt")
        self.assertEqual(len(data["available"]), 24)

    def test_given_config_when_new_game_then_config_travels_with_state(self):
        data = self._new(allowFlying=True, tokensPerPlayer=4)
        cfg = data["state"]["config"]
        self.assertTrue(cfg["allowFlying"])
        self.assertEqual(cfg["tokensPerPlayer"], 4)
        self.assertEqual(data["state"]["toPlace"]["PLAYER_B"], 4)

    def test_given_bad_config_when_new_game_then_400(self):
        r = self._post("/api/new", {"tokensPerPlayer": 50})
        self.assertEqual(r.status_code, 400)
        self.assertFalse(r.get_json()["ok"])

    def test_given_click_when_posted_then_token_placed_and_turn_passes(self):
        state = self._new()["state"]
        data = self._click(state, 0, 0)
        nxt = data["state"]
        self.assertEqual(nxt["board"][0], "A")
        self.assertEqual(nxt["currentPlayer"], "PLAYER_B")
        self.assertEqual(nxt["toPlace"]["PLAYER_A"], 8)
        self.assertIn({"type": "ownership", "position": [0, 0], "owner": "PLAYER_A"}, data["notifications"])

    def test_given_occupied_point_when_clicked_then_advisory_with_200(self):
        state = self._new()["state"]
        state = self._click(state, 0, 0)["state"]
        data = self._click(state, 0, 0)
        self.assertEqual(data["state"], state)
        self.assertEqual(
            data["notifications"],
            [{"type": "advisory", "text": "This point is taken by your opponent"}],
        )

    def test_given_mill_when_capture_confirmed_then_token_removed(self):
        state = self._new()["state"]
        for ring, index in [(0, 0), (1, 0), (0, 1), (1, 2), (0, 2)]:
            state = self._click(state, ring, index)["state"]
        self.assertEqual(state["phase"], "CAPTURE_SELECTION")
        legal = self._post("/api/legal", {"state": state}).get_json()
        self.assertEqual(sorted(legal["available"]), [[1, 0], [1, 2]])
        state = self._click(state, 1, 0)["state"]
        self.assertEqual(state["selected"], [1, 0])
        r = self._post("/api/confirm", {"state": state})
        self.assertEqual(r.status_code, 200)
        nxt = r.get_json()["state"]
        self.assertEqual(nxt["board"][8], ".")
        self.assertEqual(nxt["onBoard"]["PLAYER_B"], 1)
        self.assertEqual(nxt["phase"], "PLACING")
        self.assertEqual(nxt["currentPlayer"], "PLAYER_B")

    def test_given_running_game_when_surrender_then_opponent_wins(self):
        state = self._new()["state"]
        r = self._post("/api/surrender", {"state": state})
        data = r.get_json()
        self.assertEqual(data["state"]["phase"], "GAME_OVER")
        self.assertEqual(data["state"]["winner"], "PLAYER_B")
        self.assertIn({"type": "gameOver", "winner": "PLAYER_B"}, data["notifications"])
        self.assertEqual(data["available"], [])

    def test_given_bad_inputs_when_posted_then_400(self):
        state = self._new()["state"]
        r = self._post("/api/click", {"state": state, "position": [5, 0]})
        self.assertEqual(r.status_code, 400)
        r = self._post("/api/click", {"state": state})
        self.assertEqual(r.status_code, 400)
        r = self._post("/api/confirm", {})
        self.assertEqual(r.status_code, 400)
        broken = dict(state, board="xyz")
        r = self._post("/api/legal", {"state": broken})
        self.assertEqual(r.status_code, 400)
        broken = dict(state, phase="DANCING")
        r = self._post("/api/surrender", {"state": broken})
        self.assertEqual(r.status_code, 400)
        self.assertIn("error", r.get_json())

    def test_given_self_contradicting_state_when_posted_then_400(self):
        state = self._new()["state"]
        empty_hands = {"PLAYER_A": 0, "PLAYER_B": 0}
        bad_states = [
            # selected point not owned by the mover
            dict(state, phase="MOVING", resumePhase="MOVING", toPlace=empty_hands, selected=[0, 0]),
            # placing with nothing left to place
            dict(state, toPlace=empty_hands),
            dict(state, toPlace={"PLAYER_A": -1, "PLAYER_B": 9}),
            dict(state, winner="PLAYER_A"),
            dict(state, phase="GAME_OVER"),
            dict(state, pendingCapture=True),
            dict(state, selected=[1, 1]),
        ]
        for bad in bad_states:
            r = self._post("/api/click", {"state": bad, "position": [0, 1]})
            self.assertEqual(r.status_code, 400, bad)
            self.assertFalse(r.get_json()["ok"])
        missing = {k: v for k, v in state.items() if k != "toPlace"}
        r = self._post("/api/click", {"state": missing, "position": [0, 1]})
        self.assertEqual(r.status_code, 400)

    def test_given_board_invariant_broken_when_stepping_then_400_not_500(self):
        state = self._new()["state"]
        with patch("app.step", side_effect=IllegalStateError("Player A does not own (0,0)")):
            r = self._post("/api/click", {"state": state, "position": [0, 1]})
        self.assertEqual(r.status_code, 400)
        self.assertIn("does not own", r.get_json()["error"])

    def test_given_capture_selection_on_own_token_when_posted_then_400(self):
        state = self._new()["state"]
        for ring, index in [(0, 0), (1, 0), (0, 1), (1, 2), (0, 2)]:
            state = self._click(state, ring, index)["state"]
        bad = dict(state, selected=[0, 0])
        r = self._post("/api/confirm", {"state": bad})
        self.assertEqual(r.status_code, 400)

    def test_given_string_flags_when_new_game_then_400(self):
        for body in ({"allowFlying": "false"}, {"checkCheckmate": "0"}, {"allowFlying": 1}):
            r = self._post("/api/new", body)
            self.assertEqual(r.status_code, 400, body)
        data = self._new(allowFlying=False, checkCheckmate=False)
        self.assertEqual(data["state"]["config"]["checkCheckmate"], False)


if __name__ == "__main__":
    unittest.main(verbosity=2)
