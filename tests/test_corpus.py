import pandas as pd
import pytest

from newsprep.corpus import (Corpus, IngestError, build_documents, load_corpus,
                             load_source, merge)


def test_load_corpus_merges_and_dedupes(raw_dir):
    corpus = load_corpus(raw_dir / "Fake.csv", raw_dir / "True.csv")
    ids = [d.doc_id for d in corpus]
    # blank fake-2 dropped, real-1 duplicates fake-3
    assert ids == ["fake-0", "fake-1", "fake-3", "fake-4", "fake-5", "real-0", "real-2", "real-3"]
    texts = corpus.texts
    assert len(set(texts)) == len(texts)


def test_labels_follow_source(raw_dir):
    corpus = load_corpus(raw_dir / "Fake.csv", raw_dir / "True.csv")
    for doc in corpus:
        assert doc.label == (1 if doc.source == "fake" else 0)
    assert corpus.label_counts() == {"fake": 5, "real": 3}


def test_documents_carry_cleaned_text_and_dates(raw_dir):
    corpus = load_corpus(raw_dir / "Fake.csv", raw_dir / "True.csv")
    by_id = {d.doc_id: d for d in corpus}
    assert by_id["fake-0"].normalized == "breaking visit now trump said he'd win the election tonight"
    assert by_id["fake-0"].cleaned == "breaking visit trump said election tonight"
    assert by_id["real-0"].cleaned == "senate voted tuesday approve budget plan proposed republican leaders"
    assert by_id["real-0"].date == pd.Timestamp("2016-12-05")
    assert by_id["fake-4"].date is None
    assert by_id["fake-0"].tokens == ["breaking", "visit", "trump", "said", "election", "tonight"]


def test_duplicate_across_sources_keeps_first(make_doc):
    fake = make_doc("senate passes budget", "2017-02-01", label=1, doc_id="fake-9")
    real = make_doc("senate passes budget", "2017-02-01", label=0, doc_id="real-9")
    corpus = merge([fake], [real])
    assert [d.doc_id for d in corpus] == ["fake-9"]
    # same input order, same survivor
    assert [d.doc_id for d in merge([fake], [real])] == ["fake-9"]


def test_duplicate_within_source_keeps_earliest(make_doc):
    a = make_doc("same words here", doc_id="fake-1")
    b = make_doc("other words here", doc_id="fake-2")
    c = make_doc("same words here", doc_id="fake-3")
    assert [d.doc_id for d in merge([a, b, c], [])] == ["fake-1", "fake-2"]


def test_empty_documents_dropped(make_doc):
    empty = make_doc("", doc_id="fake-1")
    kept = make_doc("something left", doc_id="fake-2")
    assert [d.doc_id for d in merge([empty, kept], [])] == ["fake-2"]


def test_missing_column_is_fatal(tmp_path):
    path = tmp_path / "Fake.csv"
    pd.DataFrame({"title": ["t"], "text": ["x"], "date": ["December 1, 2016"]}).to_csv(path, index=False)
    with pytest.raises(IngestError, match="subject"):
        load_source(path, "fake")


def test_unreadable_source_is_fatal(tmp_path):
    with pytest.raises(IngestError):
        load_source(tmp_path / "missing.csv", "real")


def test_ingest_fails_before_any_processing(raw_dir, tmp_path):
    broken = tmp_path / "True.csv"
    pd.DataFrame({"text": ["x"]}).to_csv(broken, index=False)
    with pytest.raises(IngestError):
        load_corpus(raw_dir / "Fake.csv", broken)


def test_build_documents_keeps_row_order_and_empty_rows():
    df = pd.DataFrame({
        "text": ["Senate debate continues", None, "the and of"],
        "date": ["January 1, 2017", "not a date", "19-Feb-18"],
        "subject": ["politics", "News", "News"],
    })
    docs = build_documents(df, "fake")
    assert [d.doc_id for d in docs] == ["fake-0", "fake-1", "fake-2"]
    assert docs[1].text == "" and docs[1].is_empty
    assert docs[2].cleaned == "" and docs[2].is_empty
    assert docs[1].date is None
    assert docs[0].title == ""


def test_corpus_csv_round_trip(raw_dir, tmp_path):
    corpus = load_corpus(raw_dir / "Fake.csv", raw_dir / "True.csv")
    path = tmp_path / "corpus.csv"
    corpus.to_csv(path)
    frame = pd.read_csv(path)
    assert list(frame.columns) == ["doc_id", "source", "label", "date", "subject", "title", "normalized", "cleaned"]

    again = Corpus.read_csv(path)
    assert again.texts == corpus.texts
    assert again.labels == corpus.labels
    assert [d.date for d in again] == [d.date for d in corpus]


def test_corpus_slicing_returns_corpus(raw_dir):
    corpus = load_corpus(raw_dir / "Fake.csv", raw_dir / "True.csv")
    head = corpus[:2]
    assert isinstance(head, Corpus)
    assert len(head) == 2


def test_build_documents_survives_dotted_and_dotless_i():
    df = pd.DataFrame({
        "text": ["İ m sure the vote passed", "ı m here", "It ſ true"],
        "date": ["January 1, 2017"] * 3,
        "subject": ["politics"] * 3,
    })
    docs = build_documents(df, "fake")
    assert [d.normalized for d in docs] == ["i'm sure the vote passed", "m here", "it true"]
