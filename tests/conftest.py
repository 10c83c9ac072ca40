import matplotlib
import pandas as pd
import pytest

matplotlib.use("Agg")

from newsprep.corpus import Document

FAKE_ROWS = [
    {"title": "Trump tweets", "subject": "News", "date": "December 31, 2016",
     "text": "BREAKING: Visit http://fake.example/x now! @realnews #news Trump said he'd win "
             "the election tonight. pic.twitter.com/abc123"},
    {"title": "Clinton emails", "subject": "politics", "date": "March 3, 2017",
     "text": "Hillary Clinton emails were leaked again, reports claim the scandal keeps growing"},
    {"title": "Blank", "subject": "News", "date": "January 5, 2017", "text": "   "},
    {"title": "Budget", "subject": "politics", "date": "February 1, 2017",
     "text": "Senate passes budget resolution after lengthy debate over spending"},
    {"title": "Obama", "subject": "left-news", "date": "https://100percentfedup.com/video",
     "text": "Obama administration policies criticized by conservative groups"},
    {"title": "Russia", "subject": "politics", "date": "August 10, 2017",
     "text": "Russia investigation expands as special counsel interviews officials"},
]

REAL_ROWS = [
    {"title": "Senate budget", "subject": "politicsNews", "date": "December 5, 2016 ",
     "text": "WASHINGTON (Reuters) - The Senate voted on Tuesday to approve the budget plan "
             "proposed by Republican leaders."},
    {"title": "Budget again", "subject": "politicsNews", "date": "February 1, 2017",
     "text": "Senate passes budget resolution after lengthy debate over spending"},
    {"title": "Brexit", "subject": "worldnews", "date": "September 12, 2017",
     "text": "LONDON (Reuters) - British lawmakers debated the Brexit withdrawal bill on Wednesday."},
    {"title": "Korea", "subject": "worldnews", "date": "October 1, 2017",
     "text": "SEOUL (Reuters) - North Korea fired another missile over Japan, officials said."},
]

TRAIN_RANGE = ("2016-01-01", "2017-07-01")
EVAL_RANGE = ("2017-07-01", "2018-01-01")


@pytest.fixture
def raw_dir(tmp_path):
    data = tmp_path / "data"
    data.mkdir()
    pd.DataFrame(FAKE_ROWS).to_csv(data / "Fake.csv", index=False)
    pd.DataFrame(REAL_ROWS).to_csv(data / "True.csv", index=False)
    return data


@pytest.fixture
def make_doc():
    def _make(cleaned, date=None, label=1, doc_id=None, subject="News"):
        source = "fake" if label == 1 else "real"
        return Document(
            doc_id=doc_id or f"{source}-{abs(hash((cleaned, date))) % 10_000}",
            source=source,
            label=label,
            title="",
            text=cleaned,
            subject=subject,
            date=None if date is None else pd.Timestamp(date),
            normalized=cleaned,
            cleaned=cleaned,
        )
    return _make
