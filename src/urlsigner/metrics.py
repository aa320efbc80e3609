from prometheus_client import Counter

TOKENS_SIGNED = Counter(
    "urlsigner_tokens_signed_total",
    "Total tokens issued",
    ["signer"],
)
TOKENS_VERIFIED = Counter(
    "urlsigner_tokens_verified_total",
    "Total token verifications by outcome",
    ["signer", "result"],
)
