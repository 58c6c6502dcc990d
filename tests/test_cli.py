from projector.__main__ import main


def test_add_list_done_chain(db_path, capsys):
    db = str(db_path)

    assert main(["--db", db, "add", "Gym", "--due", "2024-12-30", "--repeat", "10",
                 "--every", "week", "--on", "mon,wed,fri"]) == 0
    assert "Created (id=1)" in capsys.readouterr().out

    assert main(["--db", db, "done", "1"]) == 0
    out = capsys.readouterr().out
    assert "pending -> done" in out
    assert "next occurrence created (#2, due 2025-01-01)" in out

    assert main(["--db", db, "list", "--status", "pending"]) == 0
    out = capsys.readouterr().out
    assert "#2 [pending] Gym (due 2025-01-01) [every week on mon,wed,fri, 9 left]" in out

    assert main(["--db", db, "chain", "2"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0].startswith("#1 [done] Gym")
    assert out[1].startswith("#2 [pending] Gym")


def test_errors_exit_with_one(db_path, capsys):
    db = str(db_path)

    assert main(["--db", db, "done", "7"]) == 1
    assert "occurrence 7 not found" in capsys.readouterr().err

    assert main(["--db", db, "add", "Gym", "--repeat", "-1"]) == 1
    assert "error:" in capsys.readouterr().err


def test_projects(db_path, capsys):
    db = str(db_path)
    assert main(["--db", db, "project", "Home", "--due", "2025-06-01"]) == 0
    assert main(["--db", db, "projects"]) == 0
    assert "#1 Home (due 2025-06-01)" in capsys.readouterr().out


def test_delete_project(db_path, capsys):
    db = str(db_path)
    main(["--db", db, "project", "Home"])
    main(["--db", db, "add", "Water plants", "--project", "1"])
    capsys.readouterr()

    assert main(["--db", db, "delete-project", "1"]) == 0
    assert "Deleted project (id=1)" in capsys.readouterr().out
    assert main(["--db", db, "delete-project", "1"]) == 1
    assert "project 1 not found" in capsys.readouterr().err


def test_bad_timezone_is_reported(db_path, capsys, monkeypatch):
    monkeypatch.setattr("projector.timeparse.Config.TIMEZONE", "Mars/Olympus_Mons")
    assert main(["--db", str(db_path), "add", "Gym", "--due", "next friday"]) == 1
    assert "unknown timezone" in capsys.readouterr().err
