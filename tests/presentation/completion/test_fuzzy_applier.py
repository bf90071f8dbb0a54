from textual_autocomplete import TargetState

from fzmerge.core.session import FuzzySession
from fzmerge.domain.types import InputState
from fzmerge.presentation.completion.applier import CompletionApplier
from fzmerge.providers import PathProvider, WordListProvider


def make_state(text: str, cursor: int | None = None) -> TargetState:
    if cursor is None:
        cursor = len(text)
    return TargetState(text=text, cursor_position=cursor)


def test_applier_replaces_typed_word() -> None:
    session = FuzzySession({"words": WordListProvider(["return"])})
    session.complete(InputState.at_end("x = ret"))

    result = CompletionApplier(session).apply("return", make_state("x = ret"))

    assert result.text == "x = return"
    assert result.cursor == len("x = return")


def test_applier_replaces_whole_path(tmp_path) -> None:
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "readme.md").write_text("hi")
    session = FuzzySession({"files": PathProvider(tmp_path)})
    session.complete(InputState.at_end("open docs/re"))

    result = CompletionApplier(session).apply("docs/readme.md", make_state("open docs/re"))

    assert result.text == "open docs/readme.md"


def test_applier_keeps_text_after_cursor() -> None:
    session = FuzzySession({"words": WordListProvider(["print"])})
    session.complete(InputState("pr()", 2))

    result = CompletionApplier(session).apply("print", make_state("pr()", cursor=2))

    assert result.text == "print()"
    assert result.cursor == 5


def test_applier_falls_back_to_symbol_at_cursor() -> None:
    session = FuzzySession({})

    result = CompletionApplier(session).apply("value", make_state("x = va"))

    assert result.text == "x = value"
