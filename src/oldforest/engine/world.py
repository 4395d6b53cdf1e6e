"""Entities of the game world: items, characters, riddles and rooms.

A fresh set of these is built for every game (see ``builder.build_world``),
so riddle progress lives directly on the objects.
"""

from dataclasses import dataclass, field
from enum import StrEnum

from .text import normalize_answer

MAX_ATTEMPTS = 3


class AnswerStatus(StrEnum):
    CORRECT = "correct"
    WRONG = "wrong"
    DEAD = "dead"
    ALREADY = "already"


@dataclass(frozen=True)
class AnswerResult:
    """Outcome of a single guess at a riddle."""

    status: AnswerStatus
    message: str
    attempts: int
    reward: str | None = None


@dataclass(frozen=True)
class Item:
    """A named object the player can carry."""

    name: str
    description: str = ""

    def matches(self, name: str) -> bool:
        return self.name.lower() == str(name or "").lower()


@dataclass
class Riddle:
    """Riddle state carried by a character that blocks the way."""

    question: str
    answers: frozenset[str]
    reward_item: str | None = None
    attempts: int = MAX_ATTEMPTS
    solved: bool = False

    @classmethod
    def create(
        cls,
        question: str,
        answers: list[str],
        reward_item: str | None = None,
    ) -> "Riddle":
        """Build a riddle, normalizing the accepted answers up front."""
        return cls(
            question=question,
            answers=frozenset(normalize_answer(a) for a in answers),
            reward_item=reward_item,
        )


@dataclass
class Character:
    """A non-player character. Riddle characters carry a ``Riddle``."""

    name: str
    description: str = ""
    riddle: Riddle | None = None

    @property
    def has_open_riddle(self) -> bool:
        return self.riddle is not None and not self.riddle.solved

    def describe(self) -> str:
        return f"{self.name}: {self.description}"

    def interact_text(self) -> str:
        """Text shown for the character when the room is rendered."""
        if self.riddle is None:
            return self.describe()
        if self.riddle.solved:
            return f"{self.name} has already been answered."
        return (
            f"{self.description}\n\n"
            f"Riddle: {self.riddle.question}\n\n"
            "(Answer by typing: answer <your answer>)"
        )

    def try_answer(self, raw_input: object) -> AnswerResult:
        """Check a guess against the riddle and advance its state.

        Knows nothing about inventory, rooms or winning; the caller
        resolves those from the returned status.
        """
        riddle = self.riddle
        if riddle is None:
            raise ValueError(f"{self.name} has no riddle to answer")

        if riddle.solved:
            return AnswerResult(
                AnswerStatus.ALREADY,
                f"You already answered {self.name}.",
                riddle.attempts,
            )

        if normalize_answer(raw_input) in riddle.answers:
            riddle.solved = True
            return AnswerResult(
                AnswerStatus.CORRECT,
                f"✅ Correct! {self.name} accepts your answer.",
                riddle.attempts,
                reward=riddle.reward_item,
            )

        riddle.attempts = max(riddle.attempts - 1, 0)
        if riddle.attempts == 0:
            return AnswerResult(
                AnswerStatus.DEAD,
                f"❌ Wrong! No attempts left. {self.name} triggers your doom. "
                "GAME OVER.",
                0,
            )
        return AnswerResult(
            AnswerStatus.WRONG,
            f"❌ Wrong! You have {riddle.attempts} attempts left.",
            riddle.attempts,
        )


@dataclass(eq=False)
class Room:
    """A location. Links point at other rooms of the same world."""

    key: str
    name: str
    description: str = ""
    image: str = ""
    cleared_image: str | None = None
    linked_rooms: dict[str, "Room"] = field(default_factory=dict)
    character: Character | None = None
    items: list[Item] = field(default_factory=list)

    @property
    def display_image(self) -> str:
        character = self.character
        if (
            character is not None
            and character.riddle is not None
            and character.riddle.solved
            and self.cleared_image
        ):
            return self.cleared_image
        return self.image

    def link_room(self, direction: str, room: "Room") -> None:
        self.linked_rooms[direction] = room

    def move(self, direction: str) -> "Room | None":
        return self.linked_rooms.get(direction)

    def details(self) -> list[str]:
        """One line per outgoing link, in the order the links were made."""
        return [
            f"The {room.name} is to the {direction}."
            for direction, room in self.linked_rooms.items()
        ]

    def describe(self) -> str:
        text = self.description
        if self.items:
            text += "\n\nYou see: " + ", ".join(item.name for item in self.items)
        return text

    def __repr__(self) -> str:
        return f"Room(key={self.key!r}, name={self.name!r})"


@dataclass
class World:
    """Registry of every room in one game, keyed by room key."""

    rooms: dict[str, Room] = field(default_factory=dict)

    def add(self, room: Room) -> Room:
        self.rooms[room.key] = room
        return room

    def room(self, key: str) -> Room:
        return self.rooms[key]

    def room_named(self, name: str) -> Room | None:
        for room in self.rooms.values():
            if room.name == name:
                return room
        return None

    def characters(self) -> list[Character]:
        return [r.character for r in self.rooms.values() if r.character is not None]
