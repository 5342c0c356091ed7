# Snake - Dark Mode
# Control bindings: the stored record, scheme presets, and the key -> action map.
#
# Keys are stored as DOM-style codes ("KeyW", "ArrowUp") so the record stays
# readable and independent of the windowing library.

from snakedark.grid import DOWN, LEFT, RIGHT, UP

SCHEME_KEYS = {
    "wasd": {"up": "KeyW", "left": "KeyA", "down": "KeyS", "right": "KeyD"},
    "arrows": {"up": "ArrowUp", "left": "ArrowLeft", "down": "ArrowDown", "right": "ArrowRight"},
}

DEFAULT_KEYS = {
    "up": "KeyW",
    "left": "KeyA",
    "down": "KeyS",
    "right": "KeyD",
    "pause": "KeyP",
    "restart": "KeyR",
    "wrap": "KeyT",
}

DIRECTION_NAMES = {"up": UP, "down": DOWN, "left": LEFT, "right": RIGHT}
ACTIONS = ("pause", "restart", "wrap")

ARROW_GLYPHS = {"ArrowUp": "↑", "ArrowDown": "↓", "ArrowLeft": "←", "ArrowRight": "→"}


def default_controls():
    return {"scheme": "wasd", "keys": dict(DEFAULT_KEYS)}


def apply_scheme(keys, scheme):
    """Overlay a preset's movement keys; "custom" keeps whatever is there."""
    out = dict(keys)
    out.update(SCHEME_KEYS.get(scheme, {}))
    return out


# Cycle order used by the menu's scheme key.
def next_scheme(scheme):
    presets = list(SCHEME_KEYS)
    if scheme not in presets:
        return presets[0]
    return presets[(presets.index(scheme) + 1) % len(presets)]


def resolve_keys(record):
    """Full key table for a stored record (None or partial records fall back to defaults)."""
    keys = dict(DEFAULT_KEYS)
    if record and isinstance(record.get("keys"), dict):
        keys.update({k: v for k, v in record["keys"].items() if v})
    return keys


def key_text(code):
    """Short label for a key code: "KeyW" -> "W", "ArrowUp" -> "↑"."""
    if not code:
        return "?"
    if code.startswith("Key"):
        return code[3:]
    return ARROW_GLYPHS.get(code, code)


class KeyMap:
    """Lookup from key code to a direction or a named action."""

    def __init__(self, keys):
        self.keys = dict(keys)
        self.directions = {self.keys[name]: vec for name, vec in DIRECTION_NAMES.items()}
        self.actions = {self.keys[name]: name for name in ACTIONS}

    @classmethod
    def from_record(cls, record):
        return cls(resolve_keys(record))

    def direction_for(self, code):
        return self.directions.get(code)

    def action_for(self, code):
        return self.actions.get(code)

    def label(self, name):
        return key_text(self.keys.get(name))
