import json
import logging
from pathlib import Path

from azport.config import settings

logger = logging.getLogger(__name__)


class TranslationStore:
    """UI string tables stored as one JSON file per language."""

    def __init__(self, locales_dir: str | Path, languages: list[str]):
        self.locales_dir = Path(locales_dir)
        self.languages = languages

    def _path(self, lang: str) -> Path:
        return self.locales_dir / f"{lang}.json"

    def read(self, lang: str) -> dict | None:
        if lang not in self.languages:
            return None
        path = self._path(lang)
        if not path.is_file():
            return None
        return json.loads(path.read_text(encoding="utf-8"))

    def write_all(self, tables: dict[str, dict]) -> list[str]:
        """Overwrite every configured language file. Returns the languages written."""
        self.locales_dir.mkdir(parents=True, exist_ok=True)
        for lang in self.languages:
            self._path(lang).write_text(
                json.dumps(tables[lang], indent=2, ensure_ascii=False),
                encoding="utf-8",
            )
        logger.info("Translations written for %s", ", ".join(self.languages))
        return list(self.languages)


def get_translation_store() -> TranslationStore:
    languages = [lang.strip() for lang in settings.translation_languages.split(",") if lang.strip()]
    return TranslationStore(settings.locales_dir, languages)
