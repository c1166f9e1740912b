import io

from openpyxl import load_workbook

from coleta_converter.workbook import encode_workbook


def test_encode_single_sheet_with_native_types():
    rows = [["nome", "idade", "obs", "data"], ["Ana", 23.0, None, "05/09/2024"], ["Bia", -1.5, "", "05/09/2024"]]
    payload = encode_workbook(rows)
    assert payload[:2] == b"PK"

    wb = load_workbook(io.BytesIO(payload))
    assert wb.sheetnames == ["Dados Coleta"]
    ws = wb["Dados Coleta"]
    assert ws["B2"].data_type == "n"
    assert ws["B2"].value == 23
    assert ws["C2"].value is None
    assert ws["C3"].value is None
    assert ws["D2"].data_type == "s"
    assert ws["D2"].value == "05/09/2024"
    assert ws["B3"].value == -1.5
