"""
Top-level package for the scentmatch perfume recommender.

This package turns a perfume catalog into a TF-IDF vector space, maps
quiz answers to descriptive keyword phrases, ranks perfumes by cosine
similarity to the user's vector and explains each match.  It also serves
a small recommendation API.  There are no side-effects on import: the
catalog index is only built when the API starts or a caller asks for it.
"""
from __future__ import annotations
