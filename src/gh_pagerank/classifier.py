from __future__ import annotations

from typing import Iterable

import spacy

CATEGORY_KEYWORDS: dict[str, frozenset[str]] = {
    "Machine Learning": frozenset({"machine learning", "deep learning", "neural network"}),
    "Web Development": frozenset(
        {"web", "html", "css", "javascript", "react", "angular", "vue", "frontend", "backend"}
    ),
    "Mobile Development": frozenset({"mobile", "android", "ios", "swift", "java", "kotlin"}),
    "DevOps": frozenset({"devops", "docker", "kubernetes", "aws", "azure", "gcp"}),
    "Security": frozenset({"security", "encryption", "penetration testing", "owasp"}),
    "Game Development": frozenset({"unity", "unreal", "game development", "game design"}),
}


class KeywordClassifier:
    """Tags a user with topical categories from free-text repository descriptions."""

    MIN_TOKEN_LENGTH = 3

    def __init__(self, num_topics: int = 4) -> None:
        self.num_topics = num_topics
        self.nlp = spacy.blank("en")
        self.stop_words = self.nlp.Defaults.stop_words

    def _tokens(self, text: str) -> list[str]:
        doc = self.nlp.make_doc(text.lower())
        return [
            token.text
            for token in doc
            if token.is_alpha and len(token.text) >= self.MIN_TOKEN_LENGTH and token.text not in self.stop_words
        ]

    @staticmethod
    def _terms(tokens: list[str]) -> list[str]:
        # unigrams first, then adjacent bigrams for the multi-word keywords
        return tokens + [f"{left} {right}" for left, right in zip(tokens, tokens[1:])]

    def count(self, descriptions: Iterable[str]) -> dict[str, int]:
        counts = {name: 0 for name in CATEGORY_KEYWORDS}
        for description in descriptions:
            if not description:
                continue
            for term in self._terms(self._tokens(description)):
                for name, keywords in CATEGORY_KEYWORDS.items():
                    if term in keywords:
                        counts[name] += 1
                        break
        return counts

    def classify(self, descriptions: Iterable[str]) -> list[str]:
        counts = self.count(descriptions)
        ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
        return [name for name, hits in ranked if hits > 0][: self.num_topics]
