from . import config


def filter_players(candidates, query, limit=config.PICKER_MAX_RESULTS):
    """Case-insensitive substring search over ``candidates``, keeping their order."""
    q = query.strip().lower()
    if not q:
        return list(candidates[:limit])
    return [name for name in candidates if q in name.lower()][:limit]


class PlayerPicker:
    """Searchable single-select for one player slot.

    The committed value belongs to the caller and is only ever written through
    ``on_change``. The picker keeps its own search ``query``, so a half-typed
    name never passes for a selection.
    """

    def __init__(self, label, on_change, max_results=config.PICKER_MAX_RESULTS):
        self.label = label
        self.on_change = on_change
        self.max_results = max_results
        self.query = ""
        self.open = False

    def focus(self):
        self.open = True

    def type(self, text):
        # Typing always drops the committed selection
        self.query = text
        self.on_change("")
        self.open = True

    def select(self, name):
        self.on_change(name)
        self.query = ""
        self.open = False

    def clear(self):
        self.query = ""
        self.on_change("")

    def dismiss(self):
        self.open = False

    def reset(self):
        self.query = ""
        self.open = False

    def matches(self, candidates):
        return filter_players(candidates, self.query, self.max_results)

    def visible_matches(self, candidates):
        """Matches shown in the dropdown, empty while it is closed."""
        if not self.open:
            return []
        return self.matches(candidates)

    def display(self, value):
        return value or self.query
