import json

from rag_context import cli


def test_version(capsys):
    assert cli.main(["version"]) == 0
    assert capsys.readouterr().out.strip()


def test_build_with_seed(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv("RAG_CONTEXT__METRICS__DRIVER", "null")
    seed = tmp_path / "docs.jsonl"
    seed.write_text(
        "\n".join(
            json.dumps(d)
            for d in [
                {"id": "a", "content": "alpha notes", "score": 0.4},
                {"id": "b", "content": "beta notes", "score": 0.9},
            ]
        ),
        encoding="utf-8",
    )
    assert cli.main(["build", "gamma", "--seed", str(seed), "--meta", "user=u1"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["query"] == "gamma"
    assert out["user"] == "u1"
    assert [d["id"] for d in out["documents"]] == ["b", "a"]


def test_build_reports_driver_errors(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv("RAG_CONTEXT__RAG__DRIVER", "does-not-exist")
    assert cli.main(["build", "q"]) == 1
    assert "unknown search driver" in capsys.readouterr().err


def test_build_reuses_file_cache_across_runs(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv("RAG_CONTEXT__METRICS__DRIVER", "null")
    monkeypatch.setenv("RAG_CONTEXT__RAG__CACHE__STORE", "file")
    monkeypatch.setenv("RAG_CONTEXT__RAG__CACHE__PATH", str(tmp_path / "cache"))
    monkeypatch.setenv("RAG_CONTEXT__RAG__CONTEXT__CACHE_TTL", "60")
    seed = tmp_path / "docs.jsonl"
    seed.write_text(json.dumps({"id": "a", "content": "first run", "score": 1.0}), encoding="utf-8")
    assert cli.main(["build", "q", "--seed", str(seed)]) == 0
    first = capsys.readouterr().out

    seed.write_text(json.dumps({"id": "b", "content": "second run", "score": 1.0}), encoding="utf-8")
    assert cli.main(["build", "q", "--seed", str(seed)]) == 0
    second = capsys.readouterr().out
    assert second == first
    assert [d["id"] for d in json.loads(second)["documents"]] == ["a"]
