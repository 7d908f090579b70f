# scentmatch/cli.py
"""
Command line runner for the scentmatch recommender.
Produces recommendations for one set of quiz answers without starting FastAPI.

- Answers come from repeated ``--answer QID=VALUE`` flags (a question given
  more than once becomes a multi-select answer) or from a JSON file
- Prints a ranked table, or the full response with ``--json``
- Optionally writes a CSV: rank, id, brand, name, matchScore, reasoning
"""

from __future__ import annotations
import argparse
import json
from pathlib import Path
from typing import Dict, List, Sequence, Union

import pandas as pd

from scentmatch.api import recommend_answers
from scentmatch.config import DEFAULT_TOP_K, RecommendResponse


def parse_answer_flags(flags: Sequence[str]) -> Dict[str, Union[str, List[str]]]:
    """``["1=dark", "1=warm", "3=woody_rain"]`` -> ``{"1": ["dark", "warm"], "3": "woody_rain"}``"""
    answers: Dict[str, Union[str, List[str]]] = {}
    for flag in flags:
        qid, sep, value = flag.partition("=")
        qid, value = qid.strip(), value.strip()
        if not sep or not qid or not value:
            raise ValueError(f"Expected QID=VALUE, got {flag!r}")
        prev = answers.get(qid)
        if prev is None:
            answers[qid] = value
        elif isinstance(prev, list):
            prev.append(value)
        else:
            answers[qid] = [prev, value]
    return answers


def load_answers_file(path: Path) -> Dict[str, Union[str, List[str]]]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    # accept both {"answers": {...}} request bodies and bare mappings
    if isinstance(data, dict) and isinstance(data.get("answers"), dict):
        data = data["answers"]
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object of answers in {path}")
    return data


def results_frame(response: RecommendResponse) -> pd.DataFrame:
    rows = [
        (rank, r.id, r.brand, r.name, r.matchScore, r.reasoning)
        for rank, r in enumerate(response.recommendations, start=1)
    ]
    return pd.DataFrame(rows, columns=["rank", "id", "brand", "name", "matchScore", "reasoning"])


def write_results_csv(response: RecommendResponse, out_path: Path) -> None:
    df = results_frame(response)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(out_path, index=False)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="scentmatch", description="Match quiz answers to perfumes.")
    ap.add_argument("--answer", dest="answer_flags", action="append", default=[], metavar="QID=VALUE",
                    help="one selected value; repeat for multi-select questions")
    ap.add_argument("--answers", dest="answers_file", type=Path, default=None,
                    help="JSON file with a mapping of question id to value(s)")
    ap.add_argument("--topk", type=int, default=DEFAULT_TOP_K, help=f"number of results (default {DEFAULT_TOP_K})")
    ap.add_argument("--catalog", type=Path, default=None, help="catalog file (JSON or CSV)")
    ap.add_argument("--out", type=Path, default=None, help="optional CSV output file")
    ap.add_argument("--json", dest="as_json", action="store_true", help="print the full JSON response")
    return ap


def main(argv: Sequence[str] | None = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    if args.topk < 1:
        ap.error("--topk must be >= 1")
    try:
        answers = load_answers_file(args.answers_file) if args.answers_file else {}
        answers.update(parse_answer_flags(args.answer_flags))
    except ValueError as e:
        ap.error(str(e))

    response = recommend_answers(answers, top_k=args.topk, catalog_path=args.catalog)

    if args.as_json:
        print(response.model_dump_json(indent=2))
    else:
        keywords = response.analysis.keywords
        print(f"Keywords: {', '.join(keywords) if keywords else '(none, using default profile)'}")
        for rank, r in enumerate(response.recommendations, start=1):
            print(f"{rank:>2}. {r.brand} - {r.name} [{r.family}]  match={r.matchScore}%  {r.reasoning}")

    if args.out:
        write_results_csv(response, args.out)
        if not args.as_json:
            print(f"Wrote {len(response.recommendations)} rows to {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
