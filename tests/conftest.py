"""
BenriQR - Pytest Configuration
================================
Fixtures and configuration for testing.
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path

import pytest
from openpyxl import Workbook

from benri_qr.config import get_settings
from benri_qr.domain.models import MeCard
from benri_qr.logging_setup import ROOT_LOGGER_NAME


# ============================================================================
# ISOLATION
# ============================================================================

@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """No BENRIQR_* variables, no .env, fresh settings and logger"""
    for key in list(os.environ):
        if key.upper().startswith("BENRIQR_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()

    yield

    get_settings.cache_clear()
    logging.getLogger(ROOT_LOGGER_NAME).handlers.clear()


@pytest.fixture
def temp_data_dir():
    """Temporary data directory"""
    temp_dir = Path(tempfile.mkdtemp())
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


# ============================================================================
# RECORD FIXTURES
# ============================================================================

@pytest.fixture
def john_card():
    """Record with name and telephone"""
    return MeCard(name="John", tel="1234-5678")


@pytest.fixture
def full_card():
    """Record with every field"""
    return MeCard(
        name="Yamada Taro",
        reading="ヤマダタロウ",
        tel="03-1234-5678",
        email="taro@example.com",
        memo="Sales",
        birthday="19900102",
        address="Tokyo",
        url="https://example.com",
        nickname="Taro",
    )


@pytest.fixture
def sample_cards():
    """Batch of three records"""
    return [
        MeCard(name="Alice", tel="111"),
        MeCard(name="Bob", email="bob@example.com"),
        MeCard(name="Carol"),
    ]


# ============================================================================
# FILE FIXTURES
# ============================================================================

@pytest.fixture
def make_workbook(temp_data_dir):
    """
    Factory writing an .xlsx file.

    Usage:
        path = make_workbook([["Name", "TEL"], ["John", "1234"]])
    """
    def _make(rows, name="contacts.xlsx", extra_sheets=()):
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = "Contacts"
        for row in rows:
            sheet.append(row)

        for title, sheet_rows in extra_sheets:
            extra = workbook.create_sheet(title)
            for row in sheet_rows:
                extra.append(row)

        path = temp_data_dir / name
        workbook.save(path)
        return path

    return _make


@pytest.fixture
def make_json(temp_data_dir):
    """Factory writing a JSON file with raw text"""
    def _make(text, name="card.json"):
        path = temp_data_dir / name
        path.write_text(text, encoding="utf-8")
        return path

    return _make
