import pytest

from bsky_intents import AppCapabilities


class CapabilityRecorder:
    """Records every outbound capability call in order."""

    def __init__(self, session: bool = True, native: bool = True):
        self.session = session
        self.native = native
        self.calls: list[tuple[str, object]] = []
        self.teardown_result = None

    def close_all(self):
        self.calls.append(("close_all", None))
        return self.teardown_result

    def open_composer(self, opts):
        self.calls.append(("open_composer", opts))

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def opened(self) -> list:
        return [arg for name, arg in self.calls if name == "open_composer"]

    def capabilities(self) -> AppCapabilities:
        return AppCapabilities(
            has_session=lambda: self.session,
            close_all_active_elements=self.close_all,
            open_composer=self.open_composer,
            is_native=lambda: self.native,
        )


@pytest.fixture
def recorder() -> CapabilityRecorder:
    return CapabilityRecorder()
