"""
Exceptions raised by the scheduling engine and its storage collaborators
"""


class VocabSrsError(Exception):
    """Base class for engine errors"""


class StoreError(VocabSrsError):
    """Progress store could not read or write a record"""


class UnknownWordError(VocabSrsError, KeyError):
    """A direct operation referenced a word that is not in the vocabulary"""

    def __init__(self, word_id: str):
        super().__init__(word_id)
        self.word_id = word_id

    def __str__(self) -> str:
        return f"Unknown word id: {self.word_id}"
