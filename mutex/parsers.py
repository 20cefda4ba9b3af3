import logging
import re
from dataclasses import asdict, dataclass
from typing import List, NamedTuple, Optional, Sequence, Tuple

from mutex.currency import clean_amount
from mutex.issuers import PROFILES, AmountStrategy, IssuerProfile, IssuerVariant, get_profile
from mutex.segmenter import segment_blocks

logger = logging.getLogger(__name__)

# Balance differences below this are floating point noise, not money.
BALANCE_EPSILON = 0.01


@dataclass(frozen=True)
class Transaction:
    date: str
    description: str
    credit: float
    debit: float
    balance: float

    def to_dict(self) -> dict:
        return asdict(self)


class Amounts(NamedTuple):
    credit: float
    debit: float
    balance: float
    # text ranges of the scope that held the amount tokens
    spans: Tuple[Tuple[int, int], ...]
    # running balance to carry into the next block, None if unknown
    running: Optional[float]


def matching_variants(lines: Sequence[str]) -> List[IssuerVariant]:
    return [p.variant for p in PROFILES if any(p.matches(line) for line in lines)]


def classify_statement(lines: Sequence[str]) -> Optional[IssuerVariant]:
    candidates = matching_variants(lines)
    if not candidates:
        return None
    if len(candidates) > 1:
        logger.warning(
            "Statement matches several issuers %s, using %s",
            [c.value for c in candidates], candidates[0].value,
        )
    return candidates[0]


def _last_match(pattern: re.Pattern, text: str) -> Optional[re.Match]:
    match = None
    for match in pattern.finditer(text):
        pass
    return match


def _split_signed(token: str, profile: IssuerProfile) -> Tuple[float, float]:
    amount = abs(clean_amount(token, profile.policy))
    if token.lstrip().startswith("-"):
        return 0.0, amount
    return amount, 0.0


def _signed_pair(scope: str, profile: IssuerProfile, previous: Optional[float]) -> Optional[Amounts]:
    match = _last_match(profile.amount_pattern, scope)
    if not match:
        return None
    credit, debit = _split_signed(match.group("amount"), profile)
    balance = clean_amount(match.group("balance"), profile.policy)
    return Amounts(credit, debit, balance, (match.span(),), balance)


def _signed_amount(scope: str, profile: IssuerProfile, previous: Optional[float]) -> Optional[Amounts]:
    match = _last_match(profile.amount_pattern, scope)
    if not match:
        return None
    credit, debit = _split_signed(match.group("amount"), profile)
    return Amounts(credit, debit, 0.0, (match.span(),), None)


def _triple_column(scope: str, profile: IssuerProfile, previous: Optional[float]) -> Optional[Amounts]:
    match = _last_match(profile.amount_pattern, scope)
    if not match:
        return None
    balance = clean_amount(match.group("balance"), profile.policy)
    return Amounts(
        credit=clean_amount(match.group("credit"), profile.policy),
        debit=clean_amount(match.group("debit"), profile.policy),
        balance=balance,
        spans=(match.span(),),
        running=balance,
    )


def _balance_delta(scope: str, profile: IssuerProfile, previous: Optional[float]) -> Optional[Amounts]:
    tokens = list(profile.amount_pattern.finditer(scope))
    if not tokens:
        return None

    if len(tokens) >= 2 and previous is not None:
        balance = clean_amount(tokens[-1].group(0), profile.policy)
        delta = balance - previous
        credit = round(delta, 2) if delta > BALANCE_EPSILON else 0.0
        debit = round(-delta, 2) if delta < -BALANCE_EPSILON else 0.0
        return Amounts(credit, debit, balance, (tokens[0].span(), tokens[-1].span()), balance)

    # No usable balance: fall back to the printed amount and its DB marker
    amount = abs(clean_amount(tokens[0].group(0), profile.policy))
    is_debit = bool(profile.debit_marker and profile.debit_marker.search(scope))
    credit, debit = (0.0, amount) if is_debit else (amount, 0.0)

    if len(tokens) >= 2:
        balance = clean_amount(tokens[-1].group(0), profile.policy)
        return Amounts(credit, debit, balance, (tokens[0].span(), tokens[-1].span()), balance)
    if previous is None:
        return Amounts(credit, debit, 0.0, (tokens[0].span(),), None)
    balance = round(previous + credit - debit, 2)
    return Amounts(credit, debit, balance, (tokens[0].span(),), balance)


STRATEGIES = {
    AmountStrategy.SIGNED_PAIR: _signed_pair,
    AmountStrategy.SIGNED_AMOUNT: _signed_amount,
    AmountStrategy.TRIPLE_COLUMN: _triple_column,
    AmountStrategy.BALANCE_DELTA: _balance_delta,
}


def _remove_spans(text: str, spans) -> str:
    for start, end in sorted(spans, reverse=True):
        text = text[:start] + " " + text[end:]
    return text


def _describe(scope: str, rest: List[str], amounts: Amounts, profile: IssuerProfile) -> str:
    desc = _remove_spans(scope, amounts.spans)
    desc = " ".join([desc] + rest)
    desc = profile.date_anchor.sub("", desc, count=1)
    for pattern in profile.strip_patterns:
        desc = pattern.sub(" ", desc)
    return re.sub(r"\s+", " ", desc).strip()


def find_opening_balance(lines: Sequence[str], profile: IssuerProfile) -> Optional[float]:
    if profile.opening_balance is None:
        return None
    for line in lines:
        match = profile.opening_balance.search(line)
        if match:
            return clean_amount(match.group("balance"), profile.policy)
    return None


def extract_transactions(lines: Sequence[str], profile: IssuerProfile) -> List[Transaction]:
    strategy = STRATEGIES[profile.strategy]
    blocks = segment_blocks(lines, profile)
    if profile.newest_first:
        # statement lists the most recent transaction first
        blocks.reverse()

    previous = find_opening_balance(lines, profile)
    transactions = []
    for block in blocks:
        date_match = profile.date_anchor.match(block[0])
        if not date_match:
            logger.debug("Dropping %s block without date: %r", profile.variant.value, block)
            continue

        if profile.amount_in_first_line:
            scope, rest = block[0], block[1:]
        else:
            scope, rest = " ".join(block), []

        amounts = strategy(scope, profile, previous)
        if amounts is None:
            logger.debug("Dropping %s block without amount: %r", profile.variant.value, block)
            continue
        previous = amounts.running

        transactions.append(Transaction(
            date=date_match.group(1),
            description=_describe(scope, rest, amounts, profile),
            credit=amounts.credit,
            debit=amounts.debit,
            balance=amounts.balance,
        ))
    return transactions


def parse_bank_statement(text: str) -> dict:
    lines = text.split("\n")
    candidates = matching_variants(lines)
    variant = classify_statement(lines)

    result = {
        "bank": variant.value if variant else None,
        "candidates": [c.value for c in candidates],
        "transactions": [],
        "total_credit": 0.0,
        "total_debit": 0.0,
        "raw_text": text,
    }
    if variant is None:
        logger.info("No supported issuer found in %d lines", len(lines))
        return result

    transactions = extract_transactions(lines, get_profile(variant))
    if not transactions:
        logger.warning("%s statement produced no transactions", variant.value)

    result["transactions"] = [t.to_dict() for t in transactions]
    result["total_credit"] = round(sum(t.credit for t in transactions), 2)
    result["total_debit"] = round(sum(t.debit for t in transactions), 2)
    logger.debug("Extracted %d %s transactions", len(transactions), variant.value)
    return result
