"""
Static table of the 73-book Catholic canon with Spanish display names.

`book_order` defines the canonical cross-book ordering used by the verse store.
"""

from typing import Dict, List, NamedTuple, Optional


class BibleBook(NamedTuple):
    key: str
    display_name: str
    book_order: int
    is_deuterocanon: bool
    testament: str


BIBLE_BOOKS: List[BibleBook] = [
    # Old Testament
    BibleBook("genesis", "Génesis", 1, False, "OT"),
    BibleBook("exodus", "Éxodo", 2, False, "OT"),
    BibleBook("leviticus", "Levítico", 3, False, "OT"),
    BibleBook("numbers", "Números", 4, False, "OT"),
    BibleBook("deuteronomy", "Deuteronomio", 5, False, "OT"),
    BibleBook("joshua", "Josué", 6, False, "OT"),
    BibleBook("judges", "Jueces", 7, False, "OT"),
    BibleBook("ruth", "Rut", 8, False, "OT"),
    BibleBook("1samuel", "1 Samuel", 9, False, "OT"),
    BibleBook("2samuel", "2 Samuel", 10, False, "OT"),
    BibleBook("1kings", "1 Reyes", 11, False, "OT"),
    BibleBook("2kings", "2 Reyes", 12, False, "OT"),
    BibleBook("1chronicles", "1 Crónicas", 13, False, "OT"),
    BibleBook("2chronicles", "2 Crónicas", 14, False, "OT"),
    BibleBook("ezra", "Esdras", 15, False, "OT"),
    BibleBook("nehemiah", "Nehemías", 16, False, "OT"),
    BibleBook("tobit", "Tobías", 17, True, "OT"),
    BibleBook("judith", "Judit", 18, True, "OT"),
    BibleBook("esther", "Ester", 19, False, "OT"),
    BibleBook("1maccabees", "1 Macabeos", 20, True, "OT"),
    BibleBook("2maccabees", "2 Macabeos", 21, True, "OT"),
    BibleBook("job", "Job", 22, False, "OT"),
    BibleBook("psalms", "Salmos", 23, False, "OT"),
    BibleBook("proverbs", "Proverbios", 24, False, "OT"),
    BibleBook("ecclesiastes", "Eclesiastés", 25, False, "OT"),
    BibleBook("songofsolomon", "Cantar de los Cantares", 26, False, "OT"),
    BibleBook("wisdom", "Sabiduría", 27, True, "OT"),
    BibleBook("sirach", "Eclesiástico (Sirácida)", 28, True, "OT"),
    BibleBook("isaiah", "Isaías", 29, False, "OT"),
    BibleBook("jeremiah", "Jeremías", 30, False, "OT"),
    BibleBook("lamentations", "Lamentaciones", 31, False, "OT"),
    BibleBook("baruch", "Baruc", 32, True, "OT"),
    BibleBook("ezekiel", "Ezequiel", 33, False, "OT"),
    BibleBook("daniel", "Daniel", 34, False, "OT"),
    BibleBook("hosea", "Oseas", 35, False, "OT"),
    BibleBook("joel", "Joel", 36, False, "OT"),
    BibleBook("amos", "Amós", 37, False, "OT"),
    BibleBook("obadiah", "Abdías", 38, False, "OT"),
    BibleBook("jonah", "Jonás", 39, False, "OT"),
    BibleBook("micah", "Miqueas", 40, False, "OT"),
    BibleBook("nahum", "Nahúm", 41, False, "OT"),
    BibleBook("habakkuk", "Habacuc", 42, False, "OT"),
    BibleBook("zephaniah", "Sofonías", 43, False, "OT"),
    BibleBook("haggai", "Ageo", 44, False, "OT"),
    BibleBook("zechariah", "Zacarías", 45, False, "OT"),
    BibleBook("malachi", "Malaquías", 46, False, "OT"),
    # New Testament
    BibleBook("matthew", "Mateo", 47, False, "NT"),
    BibleBook("mark", "Marcos", 48, False, "NT"),
    BibleBook("luke", "Lucas", 49, False, "NT"),
    BibleBook("john", "Juan", 50, False, "NT"),
    BibleBook("acts", "Hechos", 51, False, "NT"),
    BibleBook("romans", "Romanos", 52, False, "NT"),
    BibleBook("1corinthians", "1 Corintios", 53, False, "NT"),
    BibleBook("2corinthians", "2 Corintios", 54, False, "NT"),
    BibleBook("galatians", "Gálatas", 55, False, "NT"),
    BibleBook("ephesians", "Efesios", 56, False, "NT"),
    BibleBook("philippians", "Filipenses", 57, False, "NT"),
    BibleBook("colossians", "Colosenses", 58, False, "NT"),
    BibleBook("1thessalonians", "1 Tesalonicenses", 59, False, "NT"),
    BibleBook("2thessalonians", "2 Tesalonicenses", 60, False, "NT"),
    BibleBook("1timothy", "1 Timoteo", 61, False, "NT"),
    BibleBook("2timothy", "2 Timoteo", 62, False, "NT"),
    BibleBook("titus", "Tito", 63, False, "NT"),
    BibleBook("philemon", "Filemón", 64, False, "NT"),
    BibleBook("hebrews", "Hebreos", 65, False, "NT"),
    BibleBook("james", "Santiago", 66, False, "NT"),
    BibleBook("1peter", "1 Pedro", 67, False, "NT"),
    BibleBook("2peter", "2 Pedro", 68, False, "NT"),
    BibleBook("1john", "1 Juan", 69, False, "NT"),
    BibleBook("2john", "2 Juan", 70, False, "NT"),
    BibleBook("3john", "3 Juan", 71, False, "NT"),
    BibleBook("jude", "Judas", 72, False, "NT"),
    BibleBook("revelation", "Apocalipsis", 73, False, "NT"),
]

_BY_KEY: Dict[str, BibleBook] = {book.key: book for book in BIBLE_BOOKS}
_BY_ORDER: Dict[int, BibleBook] = {book.book_order: book for book in BIBLE_BOOKS}


def get_book_by_key(key: str) -> Optional[BibleBook]:
    return _BY_KEY.get(key)


def get_book_by_order(order: int) -> Optional[BibleBook]:
    return _BY_ORDER.get(order)


def format_reference(book: str, chapter: int, verse: int) -> str:
    """Format a reference as "<display name> <chapter>:<verse>".

    Unknown book keys are rendered as-is.
    """
    book_data = _BY_KEY.get(book)
    book_name = book_data.display_name if book_data else book
    return f"{book_name} {chapter}:{verse}"
