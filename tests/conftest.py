import pytest
from pathlib import Path

from adpulse.parsing import parse_csv

HEADER = "Ngày,Sản phẩm,Chi phí quảng cáo,Doanh thu,CTR,CPC,SL đơn,Chi phí vận hành\n"

# Two primary-period days (1-2 March) and the two days right before them.
SAMPLE_ROWS = (
    "1/3/2024,Serum,100.000,500.000,1,2,2,50.000\n"
    "1/3/2024,Mask,50.000,0,1,2,0,10.000\n"
    "2/3/2024,Serum,50.000,300.000,1,2,3,30.000\n"
    "28/2/2024,Serum,80.000,200.000,1,2,4,20.000\n"
    '29/2/2024,"Cream","12,5",100,1,2,1,0\n'
)


@pytest.fixture()
def sample_csv_text() -> str:
    """Sheet export with Vietnamese number formatting and D/M/YYYY dates."""
    return HEADER + SAMPLE_ROWS


@pytest.fixture()
def records(sample_csv_text):
    return parse_csv(sample_csv_text)


@pytest.fixture()
def sample_csv_file(tmp_path: Path, sample_csv_text) -> Path:
    """Same export written to disk (with a BOM, as the sheet download has)."""
    data_dir = tmp_path / "ads"
    data_dir.mkdir(parents=True)
    path = data_dir / "sheet-export.csv"
    path.write_text("\ufeff" + sample_csv_text, encoding="utf-8")
    return path
