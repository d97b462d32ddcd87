"""Tests for fdentry.core.store."""
from __future__ import annotations

import logging
import threading
from pathlib import Path

import pytest

from fdentry.core.errors import DecodeError, ParseError, StructuralError, TruncatedInputError
from fdentry.core.store import AttrValue, IndexedStore
from fdentry.core.tokenizer import Span


class _Name:
    def __init__(self, text: str) -> None:
        self._text = text

    def __str__(self) -> str:
        return self._text


class TestBuild:
    def test_simple_lookup(self) -> None:
        store = IndexedStore.build(b"[apps]\nSize=48\nScale=1")
        assert store.get("apps", "Size") == "48"
        assert store.get("apps", "Scale") == "1"
        assert len(store) == 1

    def test_preamble_only(self) -> None:
        store = IndexedStore.build(b"Size=48\nScale=1")
        assert len(store) == 0
        assert list(store.section_names()) == []

    def test_zero_attributes_rejected(self) -> None:
        with pytest.raises(StructuralError):
            IndexedStore.build(b"[S]\n")

    def test_truncated(self) -> None:
        with pytest.raises(TruncatedInputError):
            IndexedStore.build(b"[S]\nK=V\nbroken")

    def test_header_with_only_a_bare_line(self) -> None:
        with pytest.raises(StructuralError):
            IndexedStore.build(b"[S]\nfoo")

    def test_header_spanning_lines(self) -> None:
        store = IndexedStore.build(b"[a\nb]\nK=V")
        assert store.get("a\nb", "K") == "V"

    def test_one_bad_section_fails_whole_build(self) -> None:
        with pytest.raises(ParseError):
            IndexedStore.build(b"[a]\nK=V\n[b]\n[c]\nK=V")

    @pytest.mark.parametrize(
        "data",
        [
            b"[S\xff]\nK=V",
            b"[S]\nK\xff=V",
            b"[S]\nK=V\xff",
            b"[S]\nK[\xff]=V",
        ],
    )
    def test_invalid_utf8(self, data: bytes) -> None:
        with pytest.raises(DecodeError) as excinfo:
            IndexedStore.build(data)
        assert b"\xff" in excinfo.value.data
        assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)

    def test_buffer_is_owned_bytes(self) -> None:
        data = bytearray(b"[S]\nK=V")
        store = IndexedStore.build(data)
        data[4:5] = b"X"
        assert store.get("S", "K") == "V"
        assert isinstance(store.buffer, bytes)

    def test_index_holds_spans(self) -> None:
        store = IndexedStore.build(b"[S]\nK=V\nK[p]=W")
        assert store._sections["S"]["K"] == AttrValue(value=Span(6, 7), params={"p": Span(13, 14)})

    def test_logs_statistics(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="fdentry"):
            IndexedStore.build(b"[S]\nK=V\nL=W")
        assert "Indexed 1 sections, 2 attributes" in caplog.text


class TestMerge:
    def test_plain_then_param(self) -> None:
        store = IndexedStore.build(b"[S]\nA=X\nA[p]=Y")
        assert store.get("S", "A") == "X"
        assert store.get("S", "A", "p") == "Y"

    def test_param_then_plain(self) -> None:
        a = IndexedStore.build(b"[S]\nA=X\nA[p]=Y")
        b = IndexedStore.build(b"[S]\nA[p]=Y\nA=X")
        for store in (a, b):
            assert store.get("S", "A") == "X"
            assert list(store.parameter_keys("S", "A")) == ["p"]

    def test_last_plain_wins(self) -> None:
        store = IndexedStore.build(b"[S]\nA=X\nA=Z")
        assert store.get("S", "A") == "Z"

    def test_last_param_wins(self) -> None:
        store = IndexedStore.build(b"[S]\nA[p]=1\nA[p]=2\nA[q]=3")
        assert store.get("S", "A", "p") == "2"
        assert store.get("S", "A", "q") == "3"

    def test_param_only_has_no_value(self) -> None:
        store = IndexedStore.build(b"[S]\nA[p]=1")
        assert store.has_attribute("S", "A")
        assert store.get("S", "A") is None

    def test_repeated_section_replaces_earlier(self) -> None:
        store = IndexedStore.build(b"[S]\nA=1\nB=2\n[S]\nA=3")
        assert len(store) == 1
        assert store.get("S", "A") == "3"
        assert store.get("S", "B") is None
        assert set(store.attribute_names("S")) == {"A"}


class TestLookups:
    @pytest.fixture
    def store(self) -> IndexedStore:
        return IndexedStore.build(
            b"[Desktop Entry]\nName=Web\nName[de]=Netz\nGenericName[ast]=Restolador Web\n"
            b"[Desktop Action new]\nExec=web --new\n"
        )

    def test_absent_is_none(self, store: IndexedStore) -> None:
        assert store.get("Missing", "Name") is None
        assert store.get("Desktop Entry", "Missing") is None
        assert store.get("Desktop Entry", "Name", "fr") is None
        assert store.get("Desktop Action new", "Exec", "de") is None

    def test_parameter_extraction(self, store: IndexedStore) -> None:
        assert store.get("Desktop Entry", "GenericName", "ast") == "Restolador Web"
        assert store.get("Desktop Entry", "GenericName[ast]") is None

    def test_has(self, store: IndexedStore) -> None:
        assert store.has_section("Desktop Entry")
        assert "Desktop Action new" in store
        assert not store.has_section("Desktop Action old")
        assert store.has_attribute("Desktop Entry", "Name")
        assert not store.has_attribute("Desktop Entry", "Exec")
        assert not store.has_attribute("Missing", "Name")
        assert store.has_parameter("Desktop Entry", "Name", "de")
        assert not store.has_parameter("Desktop Action new", "Exec", "de")

    def test_name_iterators(self, store: IndexedStore) -> None:
        assert set(store.section_names()) == {"Desktop Entry", "Desktop Action new"}
        assert set(store.attribute_names("Desktop Entry")) == {"Name", "GenericName"}
        assert set(store.parameter_keys("Desktop Entry", "Name")) == {"de"}

    def test_name_iterators_restart(self, store: IndexedStore) -> None:
        first = store.section_names()
        assert len(list(first)) == 2
        assert list(first) == []
        assert len(list(store.section_names())) == 2

    def test_name_iterators_absent(self, store: IndexedStore) -> None:
        assert store.attribute_names("Missing") is None
        assert store.parameter_keys("Missing", "Name") is None
        assert store.parameter_keys("Desktop Action new", "Exec") is None

    def test_text_like_names(self, store: IndexedStore) -> None:
        assert store.get(_Name("Desktop Entry"), _Name("Name"), _Name("de")) == "Netz"
        assert store.has_section(_Name("Desktop Entry"))

    def test_shared_between_threads(self, store: IndexedStore) -> None:
        results: list[str | None] = []

        def read() -> None:
            results.append(store.get("Desktop Entry", "Name", "de"))

        threads = [threading.Thread(target=read) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert results == ["Netz"] * 8


class TestSampleFiles:
    def test_sshd(self, data_dir: Path) -> None:
        store = IndexedStore.build((data_dir / "sshd.service").read_bytes())
        assert store.get("Unit", "Description") == "OpenSSH Daemon"
        assert store.get("Unit", "After") == "network.target"
        assert store.get("Service", "ExecStart") == "/usr/bin/sshd -D"

    def test_firefox(self, data_dir: Path) -> None:
        store = IndexedStore.build((data_dir / "firefox.desktop").read_bytes())
        assert store.get("Desktop Entry", "GenericName", "ar") == "متصفح ويب"
        assert set(store.parameter_keys("Desktop Entry", "GenericName")) == {"ar", "ast", "de"}
