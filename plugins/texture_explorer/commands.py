"""
Explorer Commands

The menu of the explorer is a closed set of commands. Every menu entry,
key binding and panel button produces a Command; `dispatch` is the single
place that turns a Command into a state change.
"""

from collections import namedtuple
from enum import Enum

from .channels import CHANNELS, NUM_TEXTURES
from .formulas import OFF


class CommandKind(Enum):
    TEXTURE = "texture"        # same formula on all channels (index 0-9)
    CHANNEL = "channel"        # one channel formula (index 0-10)
    RANDOM = "random"
    CHANGE_DOMAIN = "change_domain"
    SAVE = "save"
    QUIT = "quit"


Command = namedtuple("Command", ["kind", "channel", "index", "domain"],
                     defaults=(None, None, None))


def texture(index):
    return Command(CommandKind.TEXTURE, index=index)


def channel(which, index):
    return Command(CommandKind.CHANNEL, channel=which, index=index)


def change_domain(domain=None):
    """Change the coordinate domain; None means ask the user for it."""
    return Command(CommandKind.CHANGE_DOMAIN, domain=domain)


RANDOM = Command(CommandKind.RANDOM)
SAVE = Command(CommandKind.SAVE)
QUIT = Command(CommandKind.QUIT)


def _build_menu():
    menu = [(f"Texture {i}", texture(i)) for i in range(NUM_TEXTURES)]
    for ch in CHANNELS:
        name = ch.value.capitalize()
        menu += [(f"{name} {i}", channel(ch, i)) for i in range(NUM_TEXTURES)]
        menu.append((f"{name} Off", channel(ch, OFF)))
    menu += [
        ("Change Coordinates", change_domain()),
        ("Random Texture", RANDOM),
        ("Save", SAVE),
        ("Quit", QUIT),
    ]
    return menu


# Ordered (label, command) entries of the full menu
MENU = _build_menu()

# Keyboard shortcuts (lower-case key names)
KEY_BINDINGS = {
    "q": QUIT,
    "escape": QUIT,
    "s": SAVE,
    "r": RANDOM,
    "c": change_domain(),
}
KEY_BINDINGS.update({str(i): texture(i) for i in range(NUM_TEXTURES)})

KEY_HELP = "Q:quit\nS:save\nR:random\nC:change coordinates\n0-9:texture"


def get_command(label):
    """Look up a menu command by its label. Returns None if not found."""
    for entry_label, command in MENU:
        if entry_label == label:
            return command
    return None


def dispatch(explorer, command, ask_domain=None, capture=None):
    """
    Apply a command to a TextureExplorer.

    Args:
        explorer: TextureExplorer to mutate
        command: Command to apply
        ask_domain: callable returning (x_min, x_max, y_min, y_max), used
                    when a CHANGE_DOMAIN command carries no domain, or
                    None if the user cancelled
        capture: callable returning the displayed pixels as a surface
                 buffer for SAVE; the explorer renders its own when None

    Returns:
        True if the displayed frame is now stale and must be redrawn.
        SAVE writes a file and returns False; QUIT is left to the caller
        (it owns the window) and also returns False.

    Raises:
        InvalidArgument, InvalidDomain, ExportError from the explorer.
        The explorer state is unchanged when one is raised.
    """
    kind = command.kind
    if kind is CommandKind.TEXTURE:
        explorer.set_texture(command.index)
    elif kind is CommandKind.CHANNEL:
        explorer.set_channel(command.channel, command.index)
    elif kind is CommandKind.RANDOM:
        explorer.randomize()
    elif kind is CommandKind.CHANGE_DOMAIN:
        domain = command.domain
        if domain is None:
            if ask_domain is None:
                return False
            domain = ask_domain()
            if domain is None:  # prompt cancelled
                return False
        explorer.set_domain(*domain)
    elif kind is CommandKind.SAVE:
        explorer.save(buffer=capture() if capture is not None else None)
        return False
    else:
        return False
    return True
