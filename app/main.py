# app/main.py
import os
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from newsprep.filtering import filter_tokens
from newsprep.normalize import FAKE, SOURCES, normalize
from newsprep.pipeline import VOCAB_FILE
from newsprep.vocab import TFIDF, WEIGHTINGS, Vocabulary

app = FastAPI(title="Fake News Feature Service", version="1.0")

# ---- frozen artifacts (relative to this file unless NEWSPREP_MODELS is set) ----
ROOT = Path(__file__).resolve().parents[1]
MODELS = Path(os.environ.get("NEWSPREP_MODELS", ROOT / "models"))
VOCAB_PATH = MODELS / VOCAB_FILE

_vocab: Optional[Vocabulary] = None


def get_vocabulary():
    global _vocab
    if _vocab is None:
        if not VOCAB_PATH.exists():
            raise HTTPException(
                status_code=503,
                detail=f"Missing vocabulary at {VOCAB_PATH}. Run: python scripts/build_features.py",
            )
        _vocab = Vocabulary.load(VOCAB_PATH)
    return _vocab


class Item(BaseModel):
    text: str
    source: str = FAKE


class VectorizeItem(Item):
    weighting: str = TFIDF


def _clean(item):
    text = (item.text or "").strip()
    if not text:
        raise HTTPException(status_code=400, detail="Text is required.")
    if item.source not in SOURCES:
        raise HTTPException(status_code=400, detail=f"source must be one of {list(SOURCES)}")
    normalized = normalize(text, item.source)
    return normalized, filter_tokens(normalized)


@app.get("/health")
def health():
    return {"status": "ok", "vocabulary": VOCAB_PATH.exists()}


@app.post("/normalize")
def normalize_text(item: Item):
    normalized, cleaned = _clean(item)
    return {"normalized": normalized, "cleaned": cleaned}


@app.post("/vectorize")
def vectorize(item: VectorizeItem):
    if item.weighting not in WEIGHTINGS:
        raise HTTPException(status_code=400, detail=f"weighting must be one of {list(WEIGHTINGS)}")
    _, cleaned = _clean(item)
    vocab = get_vocabulary()
    row = vocab.transform([cleaned], item.weighting).tocoo()
    weights = {vocab.terms[j]: round(float(v), 6) for j, v in zip(row.col, row.data)}
    return {"cleaned": cleaned, "dimension": len(vocab), "weights": weights}
