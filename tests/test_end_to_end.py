import asyncio
import json

import fix_sentiment
from conftest import FakeCompletionClient, write_json_file
from sentiment_fix.runner import run_sentiment_fix

ARTICLES = [
    {"id": "n1", "title": "Candidate surges in polls", "summary": "Big lead", "sentiment": "neutral"},
    {"id": "n2", "title": "Scandal hits campaign", "summary": "Trouble", "sentiment": "neutral"},
]


def setup_store(tmp_path):
    news_dir = tmp_path / "news"
    news_dir.mkdir()
    write_json_file(news_dir / "will-x-win-2024.json", ARTICLES)
    top_news = tmp_path / "top-news.json"
    write_json_file(top_news, {
        "markets": {
            "will-x-win-2024": [
                {"id": "n1", "title": "Candidate surges in polls", "sentiment": "neutral"},
                {"id": "n2", "title": "Scandal hits campaign", "sentiment": "neutral"},
            ],
            "other": [{"id": "o1", "title": "Other", "sentiment": "bullish"}],
        },
        "updatedAt": "2024-01-01T00:00:00.000Z",
    })
    return news_dir, top_news


def test_live_run_updates_market_file_and_index(tmp_path, stats):
    news_dir, top_news = setup_store(tmp_path)
    client = FakeCompletionClient(responses=['["bullish","bearish"]'])

    results = asyncio.run(run_sentiment_fix(client, news_dir, top_news, stats))

    assert len(results) == 1 and results[0].changed
    saved = json.loads((news_dir / "will-x-win-2024.json").read_text())
    assert [a["sentiment"] for a in saved] == ["bullish", "bearish"]

    assert stats.sentiment_changes == {"bullish": 1, "bearish": 1, "neutral": 0}
    assert stats.files_processed == 1
    assert stats.articles_processed == 2
    assert stats.errors == 0

    index = json.loads(top_news.read_text())
    assert [a["sentiment"] for a in index["markets"]["will-x-win-2024"]] == ["bullish", "bearish"]
    assert index["markets"]["other"] == [{"id": "o1", "title": "Other", "sentiment": "bullish"}]
    assert index["updatedAt"] != "2024-01-01T00:00:00.000Z"


def test_dry_run_classifies_but_writes_nothing(tmp_path, stats):
    news_dir, top_news = setup_store(tmp_path)
    market_before = (news_dir / "will-x-win-2024.json").read_text()
    index_before = top_news.read_text()
    client = FakeCompletionClient(responses=['["bullish","bearish"]'])

    results = asyncio.run(run_sentiment_fix(client, news_dir, top_news, stats, dry_run=True))

    assert [a["sentiment"] for a in results[0].articles] == ["bullish", "bearish"]
    assert stats.sentiment_changes == {"bullish": 1, "bearish": 1, "neutral": 0}
    assert (news_dir / "will-x-win-2024.json").read_text() == market_before
    assert top_news.read_text() == index_before


def test_limit_caps_processed_files(tmp_path, stats):
    news_dir, top_news = setup_store(tmp_path)
    write_json_file(news_dir / "zzz-market.json", ARTICLES)
    client = FakeCompletionClient(responder=lambda m: '["neutral","neutral"]')

    results = asyncio.run(run_sentiment_fix(client, news_dir, top_news, stats, limit=1))

    assert [r.market_id for r in results] == ["will-x-win-2024"]
    assert stats.files_processed == 1


def test_zero_limit_processes_all_files(tmp_path, stats):
    news_dir, top_news = setup_store(tmp_path)
    write_json_file(news_dir / "zzz-market.json", ARTICLES)
    client = FakeCompletionClient(responder=lambda m: '["neutral","neutral"]')

    results = asyncio.run(run_sentiment_fix(client, news_dir, top_news, stats, limit=0))

    assert [r.market_id for r in results] == ["will-x-win-2024", "zzz-market"]
    assert stats.files_processed == 2


def test_main_exits_1_without_credential(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    assert asyncio.run(fix_sentiment.main([])) == 1


def test_main_exits_1_when_news_dir_missing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

    code = asyncio.run(fix_sentiment.main(["--news-dir", str(tmp_path / "nope")]))

    assert code == 1


def test_main_reports_done_with_empty_store(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    (tmp_path / "news").mkdir()

    # No files means no API calls; the missing index is a contained error
    assert asyncio.run(fix_sentiment.main(["--dry-run"])) == 0


def test_parse_args_defaults():
    args = fix_sentiment.parse_args([])
    assert args.dry_run is False
    assert args.limit is None
    assert str(args.news_dir) == "news"
    assert str(args.top_news_file) == "top-news.json"

    args = fix_sentiment.parse_args(["--dry-run", "--limit", "5"])
    assert args.dry_run is True and args.limit == 5
