import random

import pytest

from casino_engine.domain.entities.game_type import GAME_CONFIGS, GameType
from casino_engine.domain.entities.predictions import (
    BlackjackPrediction,
    CoinflipPrediction,
    Card,
    DicePrediction,
    MinesPrediction,
    RoulettePrediction,
)
from casino_engine.domain.exceptions import InvalidPrediction, UnknownGame
from casino_engine.domain.games import (
    blackjack, coinflip, crash, dice, mines, plinko, roulette, slots,
)
from casino_engine.domain.games.engine import PayoutEngine
from tests.fakes import ScriptedRandom


def engine(**draws):
    return PayoutEngine(rng=ScriptedRandom(**draws))


def realised_return(game, prediction, draws=100_000, stake=100, seed=2024):
    """Seeded Monte-Carlo estimate of payout per unit staked"""
    payout_engine = PayoutEngine(rng=random.Random(seed))
    paid = sum(payout_engine.resolve(game, prediction, stake).payout for _ in range(draws))
    return paid / (draws * stake)


class TestDice:
    @pytest.mark.parametrize("direction", ["over", "under"])
    def test_multiplier_times_chance_is_one_minus_edge(self, direction):
        edge = GAME_CONFIGS[GameType.DICE].house_edge
        for target in range(2, 99):
            prediction = DicePrediction(direction, target)
            product = dice.multiplier_for(prediction, edge) * dice.win_chance(prediction)
            assert product == pytest.approx(1 - edge, abs=1e-12)

    def test_under_fifty_wins_just_below_target(self):
        outcome = engine(randranges=[4999]).resolve("dice", {"prediction": "under", "target": 50}, 10)
        assert outcome.win
        assert outcome.result == {"roll": 49.99, "win": True}
        assert outcome.multiplier == pytest.approx(1.98)
        assert outcome.payout == 19.8

    @pytest.mark.parametrize("direction", ["over", "under"])
    def test_roll_on_target_loses(self, direction):
        outcome = engine(randranges=[5000]).resolve("dice", {"prediction": direction, "target": 50}, 10)
        assert not outcome.win
        assert outcome.payout == 0

    @pytest.mark.parametrize("target", [1, 99, 0, 100])
    def test_target_out_of_range_rejected(self, target):
        with pytest.raises(InvalidPrediction):
            PayoutEngine().resolve("dice", {"prediction": "over", "target": target}, 10)

    def test_empirical_win_rate_matches_chance(self):
        rng = random.Random(1234)
        prediction = DicePrediction("under", 30)
        trials = 100_000
        wins = sum(dice.is_win(dice.roll(rng), prediction) for _ in range(trials))
        assert wins / trials == pytest.approx(0.30, abs=0.01)

    @pytest.mark.parametrize("direction,target", [("over", 50), ("under", 50), ("over", 70), ("under", 30)])
    def test_return_per_unit_stake_converges_to_one_minus_edge(self, direction, target):
        assert realised_return("dice", DicePrediction(direction, target)) == pytest.approx(
            1 - GAME_CONFIGS[GameType.DICE].house_edge, abs=0.02
        )

    def test_same_seed_same_outcome(self):
        first = PayoutEngine(rng=random.Random(99)).resolve("dice", {"prediction": "over", "target": 70}, 5)
        second = PayoutEngine(rng=random.Random(99)).resolve("dice", {"prediction": "over", "target": 70}, 5)
        assert first == second


class TestCoinflip:
    def test_multiplier(self):
        assert coinflip.multiplier_for(0.02) == pytest.approx(1.96)

    def test_loss_pays_nothing(self):
        outcome = engine(choices=["tails"]).resolve("coinflip", {"prediction": "heads"}, 5)
        assert not outcome.win
        assert outcome.payout == 0
        assert outcome.result == {"result": "tails", "win": False}

    def test_win_pays_stake_times_multiplier(self):
        outcome = engine(choices=["heads"]).resolve("coinflip", {"prediction": "heads"}, 10)
        assert outcome.payout == 19.6

    def test_return_per_unit_stake_converges_to_one_minus_edge(self):
        assert realised_return("coinflip", CoinflipPrediction("heads")) == pytest.approx(
            1 - GAME_CONFIGS[GameType.COINFLIP].house_edge, abs=0.02
        )

    def test_bad_side_rejected(self):
        with pytest.raises(InvalidPrediction):
            PayoutEngine().resolve("coinflip", {"prediction": "edge"}, 1)


class TestCrash:
    def test_crash_point_floor_is_one(self):
        assert crash.crash_point(0.0, 0.01) == 1.0

    def test_crash_point_formula(self):
        # log(0.5) / log(0.99) = 68.967...
        assert crash.crash_point(0.5, 0.01) == 68.96

    def test_cashout_below_crash_wins(self):
        outcome = engine(uniforms=[0.5]).resolve("crash", {"cashoutMultiplier": 2.0}, 10)
        assert outcome.win
        assert outcome.multiplier == 2.0
        assert outcome.payout == 20.0
        assert outcome.result["cashoutMultiplier"] == 2.0

    def test_cashout_above_crash_loses(self):
        outcome = engine(uniforms=[0.001]).resolve("crash", {"cashoutMultiplier": 2.0}, 10)
        assert not outcome.win
        assert outcome.payout == 0
        assert outcome.multiplier == 0
        assert outcome.result["cashoutMultiplier"] is None

    def test_cashout_defaults_to_two(self):
        outcome = engine(uniforms=[0.5]).resolve("crash", {}, 1)
        assert outcome.multiplier == 2.0

    def test_cashout_above_cap_rejected(self):
        with pytest.raises(InvalidPrediction):
            PayoutEngine().resolve("crash", {"cashoutMultiplier": 101}, 1)

    def test_cashout_below_one_rejected(self):
        with pytest.raises(InvalidPrediction):
            PayoutEngine().resolve("crash", {"cashoutMultiplier": 0.5}, 1)


class TestBlackjack:
    def hand(self, *ranks):
        return [{"rank": rank, "suit": "hearts"} for rank in ranks]

    def test_natural_pays_two_and_a_half(self):
        prediction = {"result": "win", "playerHand": self.hand("A", "K"), "dealerHand": self.hand("9", "8")}
        outcome = PayoutEngine().resolve("blackjack", prediction, 10)
        assert outcome.payout == 25.0
        assert outcome.result["blackjack"] is True

    def test_regular_win_pays_double(self):
        prediction = {"result": "win", "playerHand": self.hand("10", "5", "4"), "dealerHand": self.hand("10", "8")}
        outcome = PayoutEngine().resolve("blackjack", prediction, 10)
        assert outcome.payout == 20.0
        assert outcome.result["blackjack"] is False

    def test_push_refunds_stake_without_win(self):
        outcome = PayoutEngine().resolve("blackjack", {"result": "push"}, 10)
        assert not outcome.win
        assert outcome.push
        assert outcome.payout == 10.0

    def test_loss(self):
        outcome = PayoutEngine().resolve("blackjack", {"result": "lose"}, 10)
        assert outcome.payout == 0

    def test_natural_detection(self):
        prediction = BlackjackPrediction("win", [Card("A"), Card("Q")], [])
        assert prediction.is_natural
        assert not BlackjackPrediction("win", [Card("A"), Card("5", value=5), Card("5", value=5)], []).is_natural

    def test_blackjack_never_draws(self):
        rng = ScriptedRandom()
        blackjack.resolve(BlackjackPrediction("lose"), 1, GAME_CONFIGS[GameType.BLACKJACK], rng)
        assert rng.getstate() == ScriptedRandom().getstate()


class TestRoulette:
    def test_straight_up(self):
        outcome = engine(randranges=[17]).resolve("roulette", {"betType": "number", "value": 17}, 1)
        assert outcome.payout == 36.0
        assert outcome.result == {"number": 17, "color": "black", "win": True}

    def test_zero_loses_outside_bets(self):
        for bet in roulette.OUTSIDE_BETS:
            outcome = engine(randranges=[0]).resolve("roulette", {"betType": bet}, 1)
            assert not outcome.win
            assert outcome.result["color"] == "green"

    def test_outside_bet_multipliers(self):
        assert roulette.multiplier_for(RoulettePrediction("red")) == 2
        assert roulette.multiplier_for(RoulettePrediction("dozen2")) == 3
        assert roulette.multiplier_for(RoulettePrediction("column3")) == 3

    def test_number_value_required(self):
        with pytest.raises(InvalidPrediction):
            PayoutEngine().resolve("roulette", {"betType": "number", "value": 37}, 1)


class TestSlots:
    def test_three_of_a_kind(self):
        line, base = slots.base_line(('👑', '👑', '👑'))
        assert (line, base) == ("three_of_a_kind", 100)

    def test_pair_pays_a_third_of_symbol_value(self):
        assert slots.base_line(('💰', '🍒', '💰')) == ("two_of_a_kind", 16)
        assert slots.base_line(('🍒', '🍒', '🍋')) == ("two_of_a_kind", 1)

    def test_fruit_combo_and_lucky_stars(self):
        assert slots.base_line(('🍊', '🍒', '🍋')) == ("fruit_combo", 3)
        assert slots.base_line(('⭐', '🍇', '💎')) == ("lucky_stars", 2)
        assert slots.base_line(('⭐', '🍇', '🔔')) == ("none", 0)

    def test_spin_settles_scaled_line(self):
        outcome = engine(choices=['👑', '👑', '👑']).resolve("slots", {}, 1)
        factor = slots.scale_factor(GAME_CONFIGS[GameType.SLOTS].target_rtp)
        assert outcome.win
        assert outcome.multiplier == pytest.approx(100 * factor)
        assert outcome.result["reels"] == ['👑', '👑', '👑']

    def test_losing_spin(self):
        outcome = engine(choices=['⭐', '🍇', '🔔']).resolve("slots", {}, 1)
        assert not outcome.win
        assert outcome.payout == 0


class TestMines:
    def test_survival_probability(self):
        assert mines.survival_probability(1, 1) == pytest.approx(24 / 25)
        assert mines.survival_probability(3, 2) == pytest.approx(22 / 25 * 21 / 24)

    def test_multiplier_fair_up_to_edge(self):
        for count in (1, 3, 5, 10, 24):
            for reveals in range(1, 4):
                if reveals > 25 - count:
                    continue
                multiplier = mines.multiplier_for(count, reveals, 0.01)
                assert multiplier * mines.survival_probability(count, reveals) == pytest.approx(0.99)

    @pytest.mark.parametrize("count,tiles", [(3, (0,)), (5, (0, 1, 2))])
    def test_return_per_unit_stake_converges_to_one_minus_edge(self, count, tiles):
        assert realised_return("mines", MinesPrediction(count, tiles)) == pytest.approx(
            1 - GAME_CONFIGS[GameType.MINES].house_edge, abs=0.03
        )

    def test_safe_reveal_wins(self):
        outcome = engine(samples=[[0, 1, 2]]).resolve("mines", {"mines": 3, "tiles": [10, 11]}, 10)
        assert outcome.win
        assert outcome.result["hitMine"] is None
        assert outcome.result["minePositions"] == [0, 1, 2]

    def test_hitting_a_mine_loses(self):
        outcome = engine(samples=[[4, 11, 20]]).resolve("mines", {"mines": 3, "tiles": [10, 11]}, 10)
        assert not outcome.win
        assert outcome.result["hitMine"] == 11
        assert outcome.payout == 0

    def test_selection_above_cap_rejected(self):
        with pytest.raises(InvalidPrediction):
            PayoutEngine().resolve("mines", {"mines": 12, "tiles": list(range(13))}, 1)

    @pytest.mark.parametrize("data", [
        {"mines": 0, "tiles": [1]},
        {"mines": 25, "tiles": [1]},
        {"mines": 3, "tiles": []},
        {"mines": 3, "tiles": [1, 1]},
        {"mines": 3, "tiles": [25]},
        {"mines": 24, "tiles": [1, 2]},
    ])
    def test_invalid_selections(self, data):
        with pytest.raises(InvalidPrediction):
            MinesPrediction.from_dict(data)


class TestPlinko:
    def test_slot_is_number_of_right_bounces(self):
        path = [1, 0] * 8
        outcome = engine(randranges=path).resolve("plinko", {"riskLevel": "low"}, 1)
        assert outcome.result["slot"] == 8
        assert outcome.result["path"] == path
        assert outcome.win

    def test_edge_slot_pays_the_most(self):
        outcome = engine(randranges=[1] * 16).resolve("plinko", {"riskLevel": "high"}, 1)
        table = plinko.multipliers("high", GAME_CONFIGS[GameType.PLINKO].target_rtp)
        assert outcome.multiplier == max(table)

    def test_probabilities_sum_to_one(self):
        assert sum(plinko.slot_probabilities()) == pytest.approx(1.0)

    def test_risk_defaults_to_medium(self):
        outcome = PayoutEngine(rng=random.Random(3)).resolve("plinko", {}, 1)
        assert outcome.result["riskLevel"] == "medium"


class TestPayoutEngine:
    def test_unknown_game(self):
        with pytest.raises(UnknownGame):
            PayoutEngine().resolve("baccarat", {}, 1)

    @pytest.mark.parametrize("game", [g.value for g in GameType if g != GameType.SLOTS])
    def test_non_object_prediction_rejected(self, game):
        with pytest.raises(InvalidPrediction):
            PayoutEngine().resolve(game, ["not", "an", "object"], 1)

    def test_payout_never_exceeds_cap(self):
        rng = random.Random(42)
        payout_engine = PayoutEngine(rng=rng)
        predictions = {
            "dice": {"prediction": "over", "target": 98},
            "coinflip": {"prediction": "heads"},
            "crash": {"cashoutMultiplier": 100},
            "roulette": {"betType": "number", "value": 3},
            "slots": {},
            "mines": {"mines": 24, "tiles": [0]},
            "plinko": {"riskLevel": "high"},
        }
        for game, prediction in predictions.items():
            cap = GAME_CONFIGS[GameType(game)].max_payout_multiplier
            for _ in range(200):
                outcome = payout_engine.resolve(game, prediction, 1)
                assert 0 <= outcome.payout <= cap
