import pytest

from src.signature_register.signature_register.core.exceptions import StorageUnavailable
from src.signature_register.signature_register.roster.file_roster import FileRoster, StaticRoster


def test_static_roster_normalizes_entries():
    roster = StaticRoster([" Mario.Rossi@CINE-TV.edu.it ", "", "anna.verdi@cine-tv.edu.it"])

    assert len(roster) == 2
    assert roster.contains("mario.rossi@cine-tv.edu.it")
    assert not roster.contains("luca.neri@cine-tv.edu.it")


def test_plain_list_file(tmp_path):
    path = tmp_path / "docenti.txt"
    path.write_text("# collegio 2026\nmario.rossi@cine-tv.edu.it\n\nAnna.Verdi@cine-tv.edu.it\n", encoding="utf-8")

    roster = FileRoster(path)

    assert len(roster) == 2
    assert roster.contains("anna.verdi@cine-tv.edu.it")


def test_csv_with_email_column(tmp_path):
    path = tmp_path / "docenti.csv"
    path.write_text(
        "Cognome,Nome,Email\nRossi,Mario,mario.rossi@cine-tv.edu.it\nVerdi,Anna,anna.verdi@cine-tv.edu.it\n",
        encoding="utf-8-sig",
    )

    roster = FileRoster(path)

    assert roster.contains("mario.rossi@cine-tv.edu.it")
    assert not roster.contains("rossi")


def test_missing_file_raises_storage_unavailable(tmp_path):
    with pytest.raises(StorageUnavailable):
        FileRoster(tmp_path / "missing.txt")
