"""
Pytest configuration and shared fixtures
"""

import io
import sys
import pytest
from datetime import datetime
from pathlib import Path
from unittest.mock import Mock

import openpyxl
import pandas as pd
import xlwt

SRC_DIR = Path(__file__).parent.parent / "src"
for path in (SRC_DIR, SRC_DIR / "backend"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from workbook.workbook import Workbook  # noqa: E402


# ============================================================================
# Directory Fixtures
# ============================================================================

@pytest.fixture
def tests_dir():
    """Return path to tests directory"""
    return Path(__file__).parent


@pytest.fixture
def config_path(tests_dir):
    """Return path to the project's default config.yaml"""
    return tests_dir.parent / "configs" / "config.yaml"


# ============================================================================
# Mock Object Fixtures
# ============================================================================

@pytest.fixture
def mock_logger():
    """Return a mock logger"""
    logger = Mock()
    logger.info = Mock()
    logger.warning = Mock()
    logger.error = Mock()
    logger.debug = Mock()
    return logger


@pytest.fixture
def mock_config(tmp_path):
    """Return a mock configuration object"""
    config = Mock()
    config.source_config = {
        'base_url': 'http://www.indec.gob.ar/ftp/cuadros/sociedad',
        'filename_template': 'cuadros_informe_pobreza_{month}_{year}.xls',
        'publication_months': [3, 9],
        'lookback_periods': 8,
        'timeout_seconds': 30,
        'user_agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36',
    }
    config.table_layouts = {}
    config.target_regions = []
    config.expected_min_records = 0
    config.outputs_folder = tmp_path
    config.records_path = tmp_path / "poverty_records.json"
    config.setup_logger = Mock(return_value=Mock())
    return config


# ============================================================================
# Synthetic Workbook Fixtures
# ============================================================================

def make_grid(rows, n_rows=None):
    """Build a header-less grid; missing rows are padded with empty cells"""
    rows = [list(r) for r in rows]
    if n_rows is not None:
        rows += [[] for _ in range(n_rows - len(rows))]
    return pd.DataFrame(rows, dtype=object)


def cuadro1_rows():
    """Cuadro 1 with two semesters and poverty rows only"""
    return [
        ["Cuadro 1. Incidencia de la pobreza y la indigencia"],
        [],
        ["", "1er semestre 2020", "2do semestre 2020"],
        [],
        ["Pobreza"],
        ["Hogares", "25,0", "24,1"],
        ["Personas", "30,5", "29,0"],
    ]


def cuadro2_rows(gap=("35,1", "36,0"), severity=("14,2", None)):
    rows = [
        ["Cuadro 2.1. Brecha y severidad"],
        [],
        ["", "2do. semestre 2019", "1er semestre 2020"],
        [],
        ["Brecha", gap[0], gap[1]],
        ["Severidad", severity[0], severity[1]],
    ]
    rows += [[] for _ in range(18 - len(rows))]
    rows += [
        ["Canasta básica total", 10000.5, 11000.0],
        ["ab", 1.0, 2.0],
        ["Ingreso total familiar", "N/D", "1.234,5"],
        [],
        ["Fuente: INDEC", None, None],
    ]
    return rows


def cuadro4_rows():
    return [
        ["Cuadro 4.3. Pobreza por región"],
        [],
        ["", "1er semestre 2020", "", "", "2do semestre 2020", "", ""],
        ["", "Hogares", "", "Personas", "Hogares", "", "Personas"],
        ["Total 31 aglomerados urbanos", "30,4", "", "40,9", "31,6", "", "42,0"],
        ["Gran Buenos Aires", "31,0", "", "42,5", "32,0", "", "43,3"],
        ["Cuyo (2)", "28,9", "", "37,9", "N/D", "", "N/D"],
        ["Noreste", "29,3", "", "39,5", "30,1", "", "40,3"],
        ["Noroeste", "31,4", "", "40,3", "", "", "41,6"],
        ["Pampeana", "27,8", "", "38,0", "29,1", "", "39,4"],
        ["Patagonia", "24,8", "", "33,6", "26,0", "", "35,9"],
    ]


@pytest.fixture
def grid_factory():
    """Return the grid builder used by the synthetic workbooks"""
    return make_grid


@pytest.fixture
def cuadro1_workbook():
    """Workbook with only Cuadro 1"""
    return Workbook({"Cuadro 1": make_grid(cuadro1_rows())})


@pytest.fixture
def full_workbook():
    """Workbook with the five cuadros the pipeline reads"""
    return Workbook({
        "Índice": make_grid([["Cuadros del informe de pobreza"]]),
        "Cuadro 1": make_grid(cuadro1_rows()),
        "Cuadro 2.1": make_grid(cuadro2_rows()),
        "Cuadro 2.2": make_grid(cuadro2_rows(gap=("39,0", "40,2"), severity=("20,1", "21,3"))),
        "Cuadro 4.3": make_grid(cuadro4_rows()),
        "Cuadro 4.4": make_grid(cuadro4_rows()),
    })


@pytest.fixture
def xlsx_bytes():
    """Serialized OOXML workbook with Cuadro 1 laid out at real coordinates"""
    book = openpyxl.Workbook()
    ws = book.active
    ws.title = "Cuadro 1"
    for r, row in enumerate(cuadro1_rows(), start=1):
        for c, value in enumerate(row, start=1):
            if value not in ("", None):
                ws.cell(row=r, column=c, value=value)
    buffer = io.BytesIO()
    book.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def xls_bytes():
    """Serialized legacy BIFF workbook: Cuadro 1 plus a sheet holding a date cell"""
    book = xlwt.Workbook()
    ws = book.add_sheet("Cuadro 1")
    for r, row in enumerate(cuadro1_rows()):
        for c, value in enumerate(row):
            if value not in ("", None):
                ws.write(r, c, value)
    dates = book.add_sheet("Fecha")
    dates.write(0, 0, "Publicado")
    dates.write(0, 1, datetime(2025, 9, 24), xlwt.easyxf(num_format_str="YYYY-MM-DD"))
    buffer = io.BytesIO()
    book.save(buffer)
    return buffer.getvalue()


# ============================================================================
# Pytest Configuration
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Pure unit tests (no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Pipeline tests with mocked HTTP"
    )
