"""Game-specific prediction shapes, one dataclass per game type

Requests carry predictions as loose JSON objects; `parse_prediction` turns them
into the variant for the requested game or raises InvalidPrediction.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union
import math

from casino_engine.domain.entities.game_type import GameType
from casino_engine.domain.exceptions import InvalidPrediction

DICE_MIN_TARGET = 2
DICE_MAX_TARGET = 98

MINES_GRID_SIZE = 25

ROULETTE_NUMBER_BETS = ("number",)
ROULETTE_OUTSIDE_BETS = (
    "red", "black", "odd", "even", "low", "high",
    "dozen1", "dozen2", "dozen3", "column1", "column2", "column3",
)

PLINKO_RISK_LEVELS = ("low", "medium", "high")


def _require_mapping(data: Any) -> Dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidPrediction("Prediction must be an object")
    return data


def _as_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidPrediction(f"{name} must be an integer")
    if isinstance(value, float) and (not math.isfinite(value) or not value.is_integer()):
        raise InvalidPrediction(f"{name} must be an integer")
    return int(value)


def _as_number(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise InvalidPrediction(f"{name} must be a number")
    return float(value)


def _choice(value: Any, options: Tuple[str, ...], name: str) -> str:
    if value not in options:
        raise InvalidPrediction(f"{name} must be one of: {', '.join(options)}")
    return value


@dataclass(frozen=True)
class DicePrediction:
    prediction: str
    target: int

    @classmethod
    def from_dict(cls, data: Any) -> 'DicePrediction':
        data = _require_mapping(data)
        prediction = _choice(data.get("prediction"), ("over", "under"), "prediction")
        target = _as_int(data.get("target"), "target")
        if not DICE_MIN_TARGET <= target <= DICE_MAX_TARGET:
            raise InvalidPrediction(
                f"target must be between {DICE_MIN_TARGET} and {DICE_MAX_TARGET}"
            )
        return cls(prediction=prediction, target=target)

    def to_dict(self) -> dict:
        return {"prediction": self.prediction, "target": self.target}


@dataclass(frozen=True)
class CoinflipPrediction:
    prediction: str

    @classmethod
    def from_dict(cls, data: Any) -> 'CoinflipPrediction':
        data = _require_mapping(data)
        return cls(prediction=_choice(data.get("prediction"), ("heads", "tails"), "prediction"))

    def to_dict(self) -> dict:
        return {"prediction": self.prediction}


@dataclass(frozen=True)
class CrashPrediction:
    cashout_multiplier: float = 2.0

    @classmethod
    def from_dict(cls, data: Any) -> 'CrashPrediction':
        data = _require_mapping(data)
        raw = data.get("cashoutMultiplier")
        if raw is None:
            return cls()
        cashout = _as_number(raw, "cashoutMultiplier")
        if cashout < 1:
            raise InvalidPrediction("cashoutMultiplier must be at least 1")
        return cls(cashout_multiplier=cashout)

    def to_dict(self) -> dict:
        return {"cashoutMultiplier": self.cashout_multiplier}


@dataclass(frozen=True)
class Card:
    rank: str
    suit: Optional[str] = None
    value: int = 0

    @property
    def points(self) -> int:
        """Blackjack value with aces counted high"""
        if self.rank == "A":
            return 11
        if self.rank in ("J", "Q", "K"):
            return 10
        return self.value

    @classmethod
    def from_dict(cls, data: Any) -> 'Card':
        if not isinstance(data, dict) or "rank" not in data:
            raise InvalidPrediction("Cards must be objects with a rank")
        rank = str(data["rank"])
        value = data.get("value")
        if value is None and rank.isdigit():
            value = int(rank)
        return cls(rank=rank, suit=data.get("suit"), value=_as_int(value or 0, "card value"))

    def to_dict(self) -> dict:
        return {"rank": self.rank, "suit": self.suit, "value": self.value}


def _parse_hand(raw: Any, name: str) -> List[Card]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise InvalidPrediction(f"{name} must be a list of cards")
    return [Card.from_dict(card) for card in raw]


@dataclass(frozen=True)
class BlackjackPrediction:
    """Terminal hand state computed by the client-side rules engine"""

    result: str
    player_hand: List[Card] = field(default_factory=list)
    dealer_hand: List[Card] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> 'BlackjackPrediction':
        data = _require_mapping(data)
        return cls(
            result=_choice(data.get("result"), ("win", "lose", "push"), "result"),
            player_hand=_parse_hand(data.get("playerHand"), "playerHand"),
            dealer_hand=_parse_hand(data.get("dealerHand"), "dealerHand")
        )

    @property
    def is_natural(self) -> bool:
        return len(self.player_hand) == 2 and sum(c.points for c in self.player_hand) == 21

    def to_dict(self) -> dict:
        return {
            "result": self.result,
            "playerHand": [card.to_dict() for card in self.player_hand],
            "dealerHand": [card.to_dict() for card in self.dealer_hand]
        }


@dataclass(frozen=True)
class RoulettePrediction:
    bet_type: str
    value: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Any) -> 'RoulettePrediction':
        data = _require_mapping(data)
        bet_type = _choice(data.get("betType"), ROULETTE_NUMBER_BETS + ROULETTE_OUTSIDE_BETS, "betType")
        if bet_type != "number":
            return cls(bet_type=bet_type)
        value = _as_int(data.get("value"), "value")
        if not 0 <= value <= 36:
            raise InvalidPrediction("value must be between 0 and 36")
        return cls(bet_type=bet_type, value=value)

    def to_dict(self) -> dict:
        data = {"betType": self.bet_type}
        if self.value is not None:
            data["value"] = self.value
        return data


@dataclass(frozen=True)
class SlotsPrediction:
    """Slots take no player choice"""

    @classmethod
    def from_dict(cls, data: Any) -> 'SlotsPrediction':
        _require_mapping(data)
        return cls()

    def to_dict(self) -> dict:
        return {}


@dataclass(frozen=True)
class MinesPrediction:
    mines: int
    tiles: Tuple[int, ...]

    @classmethod
    def from_dict(cls, data: Any) -> 'MinesPrediction':
        data = _require_mapping(data)
        mines = _as_int(data.get("mines"), "mines")
        if not 1 <= mines <= MINES_GRID_SIZE - 1:
            raise InvalidPrediction(f"mines must be between 1 and {MINES_GRID_SIZE - 1}")
        raw_tiles = data.get("tiles")
        if not isinstance(raw_tiles, list) or not raw_tiles:
            raise InvalidPrediction("tiles must be a non-empty list")
        tiles = tuple(_as_int(tile, "tile") for tile in raw_tiles)
        if len(set(tiles)) != len(tiles):
            raise InvalidPrediction("tiles must be distinct")
        if any(not 0 <= tile < MINES_GRID_SIZE for tile in tiles):
            raise InvalidPrediction(f"tiles must be between 0 and {MINES_GRID_SIZE - 1}")
        if len(tiles) > MINES_GRID_SIZE - mines:
            raise InvalidPrediction("Cannot reveal more tiles than there are safe tiles")
        return cls(mines=mines, tiles=tiles)

    def to_dict(self) -> dict:
        return {"mines": self.mines, "tiles": list(self.tiles)}


@dataclass(frozen=True)
class PlinkoPrediction:
    risk_level: str = "medium"

    @classmethod
    def from_dict(cls, data: Any) -> 'PlinkoPrediction':
        data = _require_mapping(data)
        return cls(risk_level=_choice(data.get("riskLevel", "medium"), PLINKO_RISK_LEVELS, "riskLevel"))

    def to_dict(self) -> dict:
        return {"riskLevel": self.risk_level}


Prediction = Union[
    DicePrediction, CoinflipPrediction, CrashPrediction, BlackjackPrediction,
    RoulettePrediction, SlotsPrediction, MinesPrediction, PlinkoPrediction,
]

PREDICTION_TYPES: Dict[GameType, type] = {
    GameType.DICE: DicePrediction,
    GameType.COINFLIP: CoinflipPrediction,
    GameType.CRASH: CrashPrediction,
    GameType.BLACKJACK: BlackjackPrediction,
    GameType.ROULETTE: RoulettePrediction,
    GameType.SLOTS: SlotsPrediction,
    GameType.MINES: MinesPrediction,
    GameType.PLINKO: PlinkoPrediction,
}


def parse_prediction(game_type: Union[str, GameType], data: Any) -> Prediction:
    """Parse a raw prediction into the variant for `game_type`"""
    return PREDICTION_TYPES[GameType.parse(game_type)].from_dict(data)
