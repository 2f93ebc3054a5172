import unittest

from organizer import NOTES_KEY, NotesPad
from storage import InMemoryStore


class NotesPadTests(unittest.TestCase):
    def test_starts_empty_without_saved_notes(self) -> None:
        self.assertEqual("", NotesPad(InMemoryStore()).text)

    def test_update_persists_text(self) -> None:
        store = InMemoryStore()
        notes = NotesPad(store)

        notes.update("call the dentist")

        self.assertEqual("call the dentist", notes.text)
        self.assertEqual("call the dentist", NotesPad(store).text)

    def test_non_string_saved_value_is_ignored(self) -> None:
        self.assertEqual("", NotesPad(InMemoryStore({NOTES_KEY: 12})).text)


if __name__ == "__main__":
    unittest.main()
