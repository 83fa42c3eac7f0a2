"""In-memory value sources for tests."""

from typing import Optional

from ..interfaces import KeyForm, ValueSource


class StaticSource(ValueSource):
    """Answers from a fixed dict."""

    def __init__(self, values: Optional[dict[str, str]] = None, key_form: KeyForm = KeyForm.PROPERTY):
        self.values = dict(values or {})
        self.key_form = key_form

    def probe(self, key: str) -> Optional[str]:
        return self.values.get(key)


class RecordingSource(StaticSource):
    """StaticSource that records every key it was probed with."""

    def __init__(self, values: Optional[dict[str, str]] = None, key_form: KeyForm = KeyForm.PROPERTY):
        super().__init__(values, key_form)
        self.probed: list[str] = []

    def probe(self, key: str) -> Optional[str]:
        self.probed.append(key)
        return super().probe(key)
