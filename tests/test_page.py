"""
Tests for directory/page.py — mount/unmount lifecycle and text rendering.
"""

import pytest

from directory import page as pg
from directory.page import DirectoryPage
from directory.record_source import RecordSource
from conftest import BlockingGet, mock_response, mock_session_manager, wire_record

URL = "http://test/api/advocates"


def _records():
    return {"data": [
        wire_record(id=1, firstName="John", lastName="Doe", city="New York",
                    specialties=["Bipolar", "LGBTQ"], yearsOfExperience=10,
                    phoneNumber="5551234567"),
        wire_record(id=2, firstName="Jane", lastName="Smith", city="Los Angeles",
                    degree="PhD", specialties=["Trauma & PTSD"], yearsOfExperience=4,
                    phoneNumber="5559876543"),
    ]}


def _loaded_page(payload=None, status=200):
    manager = mock_session_manager(mock_response(payload, status=status))
    page = DirectoryPage(RecordSource(URL, session_manager=manager))
    page.mount()
    assert page.source.wait(5)
    page.source.join(5)
    return page


class TestLifecycle:
    def test_idle_until_mounted(self):
        manager = mock_session_manager(mock_response(_records()))
        page = DirectoryPage(RecordSource(URL, session_manager=manager))
        assert page.status == pg.IDLE
        assert page.render() == "Not loaded."
        manager.session.get.assert_not_called()

    def test_mount_moves_out_of_idle(self):
        blocking = BlockingGet(mock_response(_records()))
        page = DirectoryPage(RecordSource(URL, session_manager=mock_session_manager(get=blocking)))
        page.mount()
        assert page.status == pg.LOADING
        blocking.release.set()
        page.source.join(5)
        page.unmount()

    def test_loading_before_settle(self):
        blocking = BlockingGet(mock_response(_records()))
        page = DirectoryPage(RecordSource(URL, session_manager=mock_session_manager(get=blocking)))
        page.mount()
        assert blocking.entered.wait(5)
        assert page.status == pg.LOADING
        assert page.render() == "Loading…"
        blocking.release.set()
        page.source.join(5)
        page.unmount()

    def test_ready_after_load(self):
        page = _loaded_page(_records())
        assert page.status == pg.READY
        assert page.revision == 1
        assert len(page.engine.filtered) == 2

    def test_error_preempts_table(self):
        page = _loaded_page(status=500)
        assert page.status == pg.FAILED
        out = page.render()
        assert out.startswith("Error: Failed to load advocates")
        assert "First Name" not in out

    def test_mount_twice_fetches_once(self):
        manager = mock_session_manager(mock_response(_records()))
        page = DirectoryPage(RecordSource(URL, session_manager=manager))
        page.mount()
        page.mount()
        page.source.join(5)
        assert manager.session.get.call_count == 1

    def test_unmount_discards_late_response(self):
        blocking = BlockingGet(mock_response(_records()))
        page = DirectoryPage(RecordSource(URL, session_manager=mock_session_manager(get=blocking)))
        page.mount()
        assert blocking.entered.wait(5)
        page.unmount()
        blocking.release.set()
        page.source.join(5)

        assert page.revision == 0
        assert page.status == pg.LOADING
        assert page.engine.advocates == ()
        assert not page.mounted

    def test_unmount_is_idempotent(self):
        page = _loaded_page(_records())
        page.unmount()
        page.unmount()
        assert not page.mounted

    def test_mount_after_unmount_raises(self):
        page = DirectoryPage(RecordSource(URL, session_manager=mock_session_manager()))
        page.unmount()
        with pytest.raises(RuntimeError):
            page.mount()


class TestRender:
    def test_table_and_count(self):
        out = _loaded_page(_records()).render()
        assert out.startswith("Solace Advocates")
        assert "Years of Experience" in out
        assert "Bipolar, LGBTQ" in out
        assert "2 of 2 advocates" in out
        assert "reset" not in out

    def test_filter_narrows_and_shows_reset_hint(self):
        page = _loaded_page(_records())
        page.set_filter("city", "york")
        out = page.render()
        assert "John" in out
        assert "Jane" not in out
        assert "Filters: City: york" in out
        assert "type 'reset' to clear" in out
        assert "1 of 2 advocates" in out

    def test_no_match_message(self):
        page = _loaded_page(_records())
        page.toggle_specialty("Eating disorders")
        assert "No advocates found." in page.render()
        assert page.show_reset

    def test_reset_restores(self):
        page = _loaded_page(_records())
        page.set_filter("last_name", "zzz")
        page.reset_filters()
        assert not page.show_reset
        assert "2 of 2 advocates" in page.render()

    def test_empty_collection(self):
        page = _loaded_page({"data": []})
        assert page.status == pg.READY
        assert "No advocates found." in page.render()
