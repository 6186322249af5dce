"""Editor settings module for storing rendering and link settings."""

from dataclasses import dataclass
import json
import os

from notedown.editor_exceptions import EditorSettingsError


CURSOR_HTML = '<span class="cursor" data-cursor="true"></span>'


@dataclass
class EditorSettings:
    """
    Settings that control how the editor renders documents.
    """
    entry_route: str = "/entries"  # Route prefix for links within the app
    wiki_route: str = "/wiki"  # Route prefix for links on public wiki pages
    cursor_html: str = CURSOR_HTML
    invalid_link_text: str = "Invalid link"

    @classmethod
    def create_default(cls) -> "EditorSettings":
        """Create a new EditorSettings object with default values."""
        return cls(
            entry_route="/entries",
            wiki_route="/wiki",
            cursor_html=CURSOR_HTML,
            invalid_link_text="Invalid link"
        )

    @classmethod
    def load(cls, path: str) -> "EditorSettings":
        """
        Load editor settings from file.

        Settings missing from the file keep their default values.

        Args:
            path: Path to the settings file

        Returns:
            EditorSettings object with loaded values

        Raises:
            EditorSettingsError: If the file does not contain a valid settings object
            OSError: If the file cannot be read
        """
        # Start with default settings
        settings = cls.create_default()

        with open(path, 'r', encoding='utf-8') as f:
            try:
                data = json.load(f)

            except json.JSONDecodeError as e:
                raise EditorSettingsError(
                    f"Invalid JSON in settings file {path}: {e}",
                    {"path": path, "line": e.lineno, "column": e.colno}
                ) from e

        if not isinstance(data, dict):
            raise EditorSettingsError(
                f"Settings file {path} must contain a JSON object",
                {"path": path, "type": type(data).__name__}
            )

        field_map = {
            "entryRoute": "entry_route",
            "wikiRoute": "wiki_route",
            "cursorHtml": "cursor_html",
            "invalidLinkText": "invalid_link_text"
        }

        for key, attribute in field_map.items():
            if key not in data:
                continue

            value = data[key]
            if not isinstance(value, str):
                raise EditorSettingsError(
                    f"Setting '{key}' in {path} must be a string",
                    {"path": path, "key": key, "value": value}
                )

            setattr(settings, attribute, value)

        # Route prefixes are joined with '/' so drop any trailing separator
        settings.entry_route = settings.entry_route.rstrip("/")
        settings.wiki_route = settings.wiki_route.rstrip("/")
        return settings

    def save(self, path: str) -> None:
        """
        Save editor settings to file.

        Args:
            path: Path to save the settings file

        Raises:
            OSError: If there's an issue creating the directory or writing the file
        """
        # Ensure directory exists
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        data = {
            "entryRoute": self.entry_route,
            "wikiRoute": self.wiki_route,
            "cursorHtml": self.cursor_html,
            "invalidLinkText": self.invalid_link_text
        }

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)
