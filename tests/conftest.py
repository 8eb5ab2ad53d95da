from datetime import date

import fitz
import pandas as pd
import pytest

from invoice_labeler.extraction.text_layer import TextLayerExtractor
from invoice_labeler.session import LabelingSession


INVOICE_TEXT = (
    "Faktura VAT FZ 328/01/2023\n"
    "Sprzedawca:\n"
    "Acme Sp. z o.o.\n"
    "NIP 5260001111\n"
    "Nabywca:\n"
    "Beta S.A.\n"
    "NIP: 1234567890\n"
)


def build_pdf(*pages: str) -> bytes:
    """PDF with one text page per argument."""
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        page.insert_text((72, 72), text, fontsize=11)
    data = doc.tobytes()
    doc.close()
    return data


def write_guidelines(path, rows, sheet_name="Koszty - przyklady"):
    frame = pd.DataFrame(rows, columns=["Nazwa kontrahenta", "Etykieta"])
    with pd.ExcelWriter(path) as writer:
        pd.DataFrame({"Info": ["inne dane"]}).to_excel(writer, sheet_name="Opis", index=False)
        frame.to_excel(writer, sheet_name=sheet_name, index=False)
    return path


class FixedClock:
    def __init__(self, today: date):
        self.today = today

    def __call__(self) -> date:
        return self.today


@pytest.fixture()
def clock():
    return FixedClock(date(2025, 3, 14))


@pytest.fixture()
def invoice_pdf():
    return build_pdf(INVOICE_TEXT)


@pytest.fixture()
def guidelines_path(tmp_path):
    return write_guidelines(
        tmp_path / "wytyczne.xlsx",
        [
            ["Acme Sp. z o.o.", "3/8;MPK610;180/2025"],
            ["Gamma sp.j.", "1/2;MPK100"],
            ["", "5/5;MPK500;001/2025"],
        ],
    )


@pytest.fixture()
def session(clock, tmp_path):
    labeling = LabelingSession(
        text_extractor=TextLayerExtractor(use_ocr_fallback=False),
        clock=clock,
    )
    labeling.config.output_dir = str(tmp_path / "output")
    return labeling
