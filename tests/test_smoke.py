import io

from fastapi.testclient import TestClient
from openpyxl import load_workbook

from coleta_converter.main import app

client = TestClient(app)

XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _post(raw, filename="coleta.csv", location="Escola", date="2024-09-05", content_type="text/csv"):
    files = {"file": (filename, raw, content_type)} if raw is not None else None
    data = {}
    if location is not None:
        data["location"] = location
    if date is not None:
        data["date"] = date
    return client.post("/convert", files=files, data=data)


def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_locations():
    r = client.get("/locations")
    assert r.status_code == 200
    assert r.json() == {"locations": ["Escola", "Esquina", "Arena"]}


def test_convert_returns_xlsx_download():
    raw = "nome,idade,cidade,peso\nAna,23,Recife,61.5\n,,,\n".encode("utf-8")
    r = _post(raw)
    assert r.status_code == 200
    assert r.headers["content-type"] == XLSX
    disposition = r.headers["content-disposition"]
    assert disposition.startswith("attachment;")
    assert 'filename="coleta da Escola no dia 05-09-2024.xlsx"' in disposition

    wb = load_workbook(io.BytesIO(r.content))
    assert wb.sheetnames == ["Dados Coleta"]
    rows = list(wb["Dados Coleta"].iter_rows(values_only=True))
    assert rows == [
        ("nome", "idade", "cidade", "data", "peso"),
        ("Ana", 23, "Recife", "05/09/2024", 61.5),
    ]


def test_convert_latin1_input():
    # Latin-1 characters must survive the trip into the workbook
    raw = "nome,cidade,bairro\nJosé,Montréal,Centro\n".encode("latin-1")
    r = _post(raw, location="Arena")
    assert r.status_code == 200
    rows = list(load_workbook(io.BytesIO(r.content)).active.iter_rows(values_only=True))
    assert rows[1] == ("José", "Montréal", "Centro", "05/09/2024")


def test_convert_missing_location():
    r = _post(b"a,b\n1,2\n", location=None)
    assert r.status_code == 422
    assert r.json()["detail"]["kind"] == "MissingField"


def test_convert_missing_file():
    r = _post(None)
    assert r.status_code == 422
    assert r.json()["detail"] == {"kind": "MissingField", "message": "Todos os campos são obrigatórios."}


def test_convert_rejects_non_csv():
    r = _post(b"a,b\n1,2\n", filename="coleta.txt", content_type="text/plain")
    assert r.status_code == 422
    assert r.json()["detail"]["kind"] == "InvalidFileType"


def test_convert_accepts_csv_media_type_with_other_suffix():
    r = _post(b"a,b\n1,2\n", filename="dados.txt", content_type="text/csv")
    assert r.status_code == 200
    assert r.headers["content-type"] == XLSX


def test_convert_accepts_csv_suffix_with_generic_media_type():
    r = _post(b"a,b\n1,2\n", filename="dados.CSV", content_type="application/octet-stream")
    assert r.status_code == 200


def test_convert_latin1_portuguese_text():
    raw = "nome,cidade,fruta\nJoão,São Paulo,Açaí\n".encode("latin-1")
    r = _post(raw, location="Esquina")
    assert r.status_code == 200
    rows = list(load_workbook(io.BytesIO(r.content)).active.iter_rows(values_only=True))
    assert rows[1] == ("João", "São Paulo", "Açaí", "05/09/2024")


def test_convert_rejects_unknown_location():
    r = _post(b"a,b\n1,2\n", location="Praia")
    assert r.status_code == 422
    assert r.json()["detail"]["kind"] == "InvalidLocation"


def test_convert_bad_date():
    r = _post(b"a,b\n1,2\n", date="2024-9")
    assert r.status_code == 422
    assert r.json()["detail"]["kind"] == "InvalidDateFormat"


def test_convert_empty_file():
    r = _post(b"")
    assert r.status_code == 400
    assert r.json()["detail"]["message"] == "O arquivo CSV está vazio ou é inválido."


def test_convert_header_only():
    r = _post(b"nome,idade\n , \n")
    assert r.status_code == 400
    assert r.json()["detail"]["kind"] == "NoDataRows"
