"""Reviewer suggestion from a path-prefix ownership map."""

import logging
from typing import FrozenSet, Optional, Sequence

from .models import ChangeSet, ReviewerSuggestion


class ReviewerSuggester:
    """Suggests owners for a changeset using longest-prefix matching."""

    def __init__(self, suggestions: Sequence[ReviewerSuggestion]):
        # Longest prefix first, ties in lexical order, so the first match wins
        self.suggestions = sorted(suggestions, key=lambda s: (-len(s.path_prefix), s.path_prefix))

    def match(self, path: str) -> Optional[ReviewerSuggestion]:
        """Return the most specific ownership entry for path, or None."""
        for suggestion in self.suggestions:
            if path.startswith(suggestion.path_prefix):
                return suggestion
        return None

    def owners_for_path(self, path: str) -> FrozenSet[str]:
        suggestion = self.match(path)
        return suggestion.owners if suggestion else frozenset()

    def suggest(self, change_set: ChangeSet) -> FrozenSet[str]:
        """Union of the owners of every file's best matching prefix.

        Returns an empty set when nothing matches; the caller picks the fallback.
        """
        owners = set()
        unowned = 0
        for changed_file in change_set:
            suggestion = self.match(changed_file.path)
            if suggestion is None:
                unowned += 1
                continue
            owners.update(suggestion.owners)

        if unowned:
            logging.debug(f"{unowned} file(s) have no matching owner prefix")
        return frozenset(owners)
