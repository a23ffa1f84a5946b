"""Tests for the directory browser prompt."""

import os
import shutil

import pytest
from conftest import BACKSPACE, DOWN, ENTER, SPACE, UP, FakeTerminal, typed

from snpy.errors import InvalidBasePath
from snpy.filesystem import LocalFileSystem
from snpy.models import SELECT_BACK_PATH, SELECT_THIS_PATH
from snpy.ui.browser import DirectoryBrowser
from snpy.ui.prompts import PromptStack


class FailingMkdirFileSystem(LocalFileSystem):
    def create_directory(self, path: str) -> None:
        raise PermissionError(13, "Permission denied", path)


class UnreadableFileSystem(LocalFileSystem):
    """Refuses to list any directory named ``locked``."""

    def list_subdirectories(self, path: str) -> list[str]:
        if os.path.basename(path) == "locked":
            raise PermissionError(13, "Permission denied", path)
        return super().list_subdirectories(path)


@pytest.fixture
def errors() -> list[str]:
    return []


def make_browser(errors, base=".", fs=None) -> DirectoryBrowser:
    return DirectoryBrowser("Choose target directory", base, fs or LocalFileSystem(), errors.append)


def run(browser, *keys):
    terminal = FakeTerminal(keys)
    result = PromptStack(terminal).run(browser)
    assert not terminal.keys
    return result, terminal


class TestChoices:
    def test_home_has_no_back_entry(self, in_tmp, errors):
        (in_tmp / "b").mkdir()
        (in_tmp / "a").mkdir()
        (in_tmp / "file.txt").write_text("x")
        browser = make_browser(errors)
        assert browser.current_choices() == [SELECT_THIS_PATH, "a", "b"]

    def test_back_entry_away_from_home(self, in_tmp, errors):
        (in_tmp / "src" / "lib").mkdir(parents=True)
        browser = make_browser(errors)
        browser.enter("src")
        assert browser.current_choices() == [SELECT_THIS_PATH, SELECT_BACK_PATH, "lib"]

    def test_listing_is_not_cached(self, in_tmp, errors):
        browser = make_browser(errors)
        assert browser.current_choices() == [SELECT_THIS_PATH]
        (in_tmp / "new").mkdir()
        assert browser.current_choices() == [SELECT_THIS_PATH, "new"]

    def test_missing_base_path_rejected(self, in_tmp, errors):
        with pytest.raises(InvalidBasePath):
            make_browser(errors, base="missing")

    def test_file_base_path_rejected(self, in_tmp, errors):
        (in_tmp / "file.txt").write_text("x")
        with pytest.raises(InvalidBasePath):
            make_browser(errors, base="file.txt")

    @pytest.mark.parametrize("base", ["./", "./src/..", "."])
    def test_equivalent_home_forms(self, in_tmp, errors, base):
        (in_tmp / "src").mkdir()
        browser = make_browser(errors, base=base)
        assert browser.base_path == "."
        assert browser.at_home


class TestNavigation:
    def test_select_this_path_at_home(self, in_tmp, errors):
        result, _ = run(make_browser(errors), ENTER)
        assert result == "."

    def test_enter_subdirectory_and_select(self, in_tmp, errors):
        (in_tmp / "src" / "components").mkdir(parents=True)
        # [THIS, src] -> src: [THIS, .., components] -> components: [THIS, ..]
        result, _ = run(make_browser(errors), DOWN, ENTER, DOWN, DOWN, ENTER, ENTER)
        assert result == os.path.join("src", "components")

    def test_back_entry_goes_to_parent(self, in_tmp, errors):
        (in_tmp / "src").mkdir()
        result, _ = run(make_browser(errors), DOWN, ENTER, DOWN, ENTER, ENTER)
        assert result == "."

    def test_backspace_goes_up(self, in_tmp, errors):
        (in_tmp / "src" / "lib").mkdir(parents=True)
        result, _ = run(make_browser(errors), DOWN, ENTER, DOWN, DOWN, ENTER, BACKSPACE, ENTER)
        assert result == "src"

    def test_backspace_at_home_is_noop(self, in_tmp, errors):
        (in_tmp / "src").mkdir()
        browser = make_browser(errors)
        browser.cursor = 1
        browser.handle(BACKSPACE)
        assert browser.current_path == "."
        assert browser.cursor == 1

    def test_cursor_resets_on_navigation(self, in_tmp, errors):
        (in_tmp / "src").mkdir()
        browser = make_browser(errors)
        browser.handle(DOWN)
        browser.handle(ENTER)
        assert browser.current_path == "src"
        assert browser.cursor == 0

    def test_absolute_base_path(self, tmp_path, errors):
        (tmp_path / "src").mkdir()
        result, _ = run(make_browser(errors, base=str(tmp_path)), DOWN, ENTER, DOWN, ENTER, ENTER)
        assert result == str(tmp_path)

    def test_wraparound_cycle(self, in_tmp, errors):
        for name in ("a", "b", "c"):
            (in_tmp / name).mkdir()
        browser = make_browser(errors)
        browser.cursor = 2
        for _ in range(4):
            browser.handle(DOWN)
        assert browser.cursor == 2
        browser.cursor = 0
        browser.handle(UP)
        assert browser.cursor == 3

    def test_unreadable_subdirectory_stays_put(self, in_tmp, errors):
        (in_tmp / "locked").mkdir()
        browser = make_browser(errors, fs=UnreadableFileSystem())
        browser.handle(DOWN)
        browser.handle(ENTER)
        assert browser.current_path == "."
        assert errors == ["\nCannot open folder!\n"]

    def test_enter_after_listing_shrank_does_not_act_blind(self, in_tmp, errors):
        (in_tmp / "a").mkdir()
        (in_tmp / "b").mkdir()
        browser = make_browser(errors)
        browser.cursor = 2
        browser.render(FakeTerminal())
        shutil.rmtree(in_tmp / "b")
        assert browser.handle(ENTER) is None
        assert browser.current_path == "."
        assert browser.cursor == 1
        assert errors == []

    def test_render_after_listing_shrank_highlights_last_row(self, in_tmp, errors):
        (in_tmp / "a").mkdir()
        (in_tmp / "b").mkdir()
        browser = make_browser(errors)
        browser.cursor = 2
        browser.render(FakeTerminal())
        shutil.rmtree(in_tmp / "b")
        terminal = FakeTerminal()
        browser.render(terminal)
        assert "> 📁 a" in terminal.styled("selected")
        browser.handle(ENTER)
        assert browser.current_path == "a"

    def test_render_shows_path_and_icons(self, in_tmp, errors):
        (in_tmp / "src" / "lib").mkdir(parents=True)
        browser = make_browser(errors)
        browser.enter("src")
        terminal = FakeTerminal()
        browser.render(terminal)
        assert "Current path: src" in terminal.screen
        assert "> [ SELECT THIS PATH ]" in terminal.styled("selected")
        assert "  📂 .." in terminal.screen
        assert "  📁 lib" in terminal.screen
        assert "Backspace to go up" in terminal.screen


class TestCreateFolder:
    def test_create_moves_into_new_folder(self, in_tmp, errors):
        result, terminal = run(make_browser(errors), SPACE, *typed("foo"), ENTER, ENTER)
        assert result == "foo"
        assert (in_tmp / "foo").is_dir()
        assert errors == []
        # Browser raw, name prompt line mode, browser raw again
        assert terminal.raw_modes == [True, False, True]

    def test_round_trip_back_home(self, in_tmp, errors):
        keys = [SPACE, *typed("foo"), ENTER, DOWN, ENTER, ENTER]
        result, _ = run(make_browser(errors), *keys)
        assert result == "."

    def test_empty_name_aborts(self, in_tmp, errors):
        result, _ = run(make_browser(errors), SPACE, ENTER, ENTER)
        assert result == "."
        assert list(in_tmp.iterdir()) == []
        assert errors == []

    def test_existing_folder_reported_and_not_entered(self, in_tmp, errors):
        (in_tmp / "foo").mkdir()
        browser = make_browser(errors)
        browser.cursor = 1
        result, _ = run(browser, SPACE, *typed("foo"), ENTER, UP, ENTER)
        assert result == "."
        assert errors == ["\nFolder already exists!\n"]

    def test_existing_file_counts_as_existing(self, in_tmp, errors):
        (in_tmp / "foo").write_text("x")
        browser = make_browser(errors)
        result, _ = run(browser, SPACE, *typed("foo"), ENTER, ENTER)
        assert result == "."
        assert errors == ["\nFolder already exists!\n"]

    def test_creation_failure_reported(self, in_tmp, errors):
        browser = make_browser(errors, fs=FailingMkdirFileSystem())
        result, _ = run(browser, SPACE, *typed("foo"), ENTER, ENTER)
        assert result == "."
        assert errors == ["\nFailed to create folder!\n"]
        assert not (in_tmp / "foo").exists()

    def test_name_prompt_shows_current_path(self, in_tmp, errors):
        (in_tmp / "src").mkdir()
        browser = make_browser(errors)
        browser.enter("src")
        _, terminal = run(browser, SPACE, *typed("x"), ENTER, ENTER)
        assert "Enter new folder name: " in terminal.styled("prompt")
        assert "Current path: src" in terminal.styled("message")
        assert (in_tmp / "src" / "x").is_dir()

    @pytest.mark.parametrize("name", ["../x", os.path.join("nested", "x"), "..", "."])
    def test_name_must_stay_inside_current_folder(self, in_tmp, errors, name):
        base = in_tmp / "base"
        base.mkdir()
        browser = make_browser(errors, base="base")
        result, _ = run(browser, SPACE, *typed(name), ENTER, ENTER)
        assert result == "base"
        assert errors == ["\nInvalid folder name!\n"]
        assert sorted(p.name for p in in_tmp.iterdir()) == ["base"]
        assert list(base.iterdir()) == []
