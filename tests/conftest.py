# Shared pytest fixtures
from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

# Allocation sheet: metadata row, header without a label for the area column,
# wide product columns with thousands separators and a non-numeric cell.
ALLOCATION_CSV = """Weekly allocation,,,
Branch,Item Description,Backribs,Spareribs
North,Makati,Pack,10,5
North,Ortigas,Pack,"1,200",3
South,Alabang,Pack,4,n/a
"""

# Plain long-looking export with one numeric column.
SALES_TSV = "Product\tBranch\tRegion\tQty\nWidgets\tEast\tNorth\t10\nGadgets\tEast\tNorth\t1,234.5\nWidgets\tWest\tSouth\t5%\n"

NOTES_CSV = """Notes,Comments
call back,none
follow up,later
"""


@pytest.fixture()
def allocation_csv() -> str:
    return ALLOCATION_CSV


@pytest.fixture()
def sales_tsv() -> str:
    return SALES_TSV


@pytest.fixture()
def notes_csv() -> str:
    return NOTES_CSV


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("ALLOCVIZ_CONFIG", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """role_keywords:
  branch: [branch, store, outlet]
fixed_products:
  positions: [3, 7]
  names: [backribs, spareribs, chicken paa]
default_product_label: Everything
session_path: ./state/session.json
preview_rows: 5
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "allocviz.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def allocation_file(temp_workdir: Path) -> Path:
    f = temp_workdir / "data" / "alloc.csv"
    f.write_text(ALLOCATION_CSV, encoding="utf-8")
    return f


@pytest.fixture()
def sales_file(temp_workdir: Path) -> Path:
    f = temp_workdir / "data" / "sales.tsv"
    f.write_text(SALES_TSV, encoding="utf-8")
    return f


@pytest.fixture()
def notes_file(temp_workdir: Path) -> Path:
    f = temp_workdir / "data" / "notes.csv"
    f.write_text(NOTES_CSV, encoding="utf-8")
    return f
