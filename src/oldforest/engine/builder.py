"""Construct the fixed five-room world of the Old Forest.

Every call returns a brand new world, so a restart never shares rooms or
riddle progress with the previous game.
"""

from .world import Character, Riddle, Room, World

# Room keys
FOREST = "forest"
BRIDGE = "bridge"
RIVER = "river"
CASTLE = "castle"
HOME = "home"

START_ROOM = FOREST

# Names the game rules check literally
CASTLE_NAME = "Old Castle"
HOME_NAME = "Home"
STONE_KEY = "Stone Key"
WATER_KEY = "Water Key"
VICTORY_ITEM = "Treasure (Victory)"

IMAGE_ROOT = "/assets/img"


def _image(filename: str) -> str:
    return f"{IMAGE_ROOT}/{filename}"


def _build_rooms(world: World) -> None:
    world.add(Room(
        key=FOREST,
        name="Forest Entrance",
        description=(
            "You stand at the edge of the Old Forest. A path winds deeper "
            "into the shadows. Legends say treasures lie within, but few "
            "return."
        ),
        image=_image("forest.jpg"),
    ))
    world.add(Room(
        key=BRIDGE,
        name="Bridge",
        description=(
            "An ancient mossy bridge stretches over a rushing river. "
            "A hulking troll blocks the way."
        ),
        image=_image("monster.jpg"),
        cleared_image=_image("bridge.jpg"),
    ))
    world.add(Room(
        key=RIVER,
        name="River",
        description=(
            "A glittering river cuts through the forest. "
            "The water ripples oddly."
        ),
        image=_image("nymph.jpg"),
        cleared_image=_image("water.jpg"),
    ))
    world.add(Room(
        key=CASTLE,
        name=CASTLE_NAME,
        description=(
            "You are now in an old castle standing before a dragon sleeping "
            "on treasure. A sinister dwarf appears before you."
        ),
        image=_image("castle.jpg"),
    ))
    world.add(Room(
        key=HOME,
        name=HOME_NAME,
        description=(
            "You are suddenly transported back home safely standing in your "
            "backyard."
        ),
        image=_image("home.jpg"),
    ))


def _link_rooms(world: World) -> None:
    forest = world.room(FOREST)
    forest.link_room("east", world.room(BRIDGE))
    forest.link_room("south", world.room(RIVER))
    forest.link_room("west", world.room(CASTLE))
    world.room(BRIDGE).link_room("west", forest)
    world.room(RIVER).link_room("north", forest)
    world.room(CASTLE).link_room("east", forest)


def _place_characters(world: World) -> None:
    world.room(BRIDGE).character = Character(
        name="Troll",
        description=(
            "A huge troll stands in the middle of the bridge blocking your way."
        ),
        riddle=Riddle.create(
            "Walk right through me, never feel me. Always lurking, never "
            "seen. What am I?",
            ["shadow", "a shadow"],
            reward_item=STONE_KEY,
        ),
    )
    world.room(RIVER).character = Character(
        name="Water Nymph",
        description=(
            "An eerie looking water nymph stands in the river and prevents "
            "you from moving with her magical powers."
        ),
        riddle=Riddle.create(
            "What always runs but never walks, has a bed but never sleeps?",
            ["river", "a river"],
            reward_item=WATER_KEY,
        ),
    )
    world.room(CASTLE).character = Character(
        name="Sinister Dwarf",
        description="A sinister dwarf appears before you and asks you a riddle.",
        riddle=Riddle.create(
            "I am always hungry, I must always be fed, The finger I touch "
            "will soon turn red.",
            ["fire"],
            reward_item=VICTORY_ITEM,
        ),
    )


def build_world() -> World:
    """Build a fresh world with every riddle unsolved."""
    world = World()
    _build_rooms(world)
    _link_rooms(world)
    _place_characters(world)
    return world
