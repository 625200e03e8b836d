"""Command line для Riemann Sum.

Exit codes:
- 0: сумма вычислена
- 1: engine вернул отказ валидации
- 2: ошибка аргументов (argparse)
"""

import argparse
import json
import logging
import sys
from contextlib import ExitStack
from typing import Callable, List, Optional, Sequence, TextIO

from src.app.session import IntegrationSession, SessionOutcome
from src.catalog.functions import (
    FunctionKey,
    UnknownFunctionError,
    exact_integral,
    get_entry,
    parse_function_key,
    render_menu,
)
from src.collector.parameters import InteractiveParameterProvider
from src.core.config import (
    DEFAULT_A,
    DEFAULT_B,
    DEFAULT_N,
    LOG_LEVELS,
    EngineConfig,
    get_settings,
)
from src.core.contracts import validate_riemann_request, validate_riemann_result
from src.core.domain.integration import IntegrationRequest, SamplingRule
from src.core.logging_config import configure_logging
from src.core.math.numerical_safeguards import is_valid_float
from src.core.math.riemann import RiemannSumEngine
from src.reporting.sinks import FanOutReporter, LoggingReporter, TranscriptReporter

logger = logging.getLogger(__name__)

BANNER_LINE = "--------------------------------"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="riemann-sum",
        description="Approximate a definite integral with a left, right or midpoint Riemann sum.",
    )
    p.add_argument(
        "--function",
        "-f",
        default=FunctionKey.SQUARE.value,
        help="catalog function: value (x^2), name (SQUARE) or menu index (0)",
    )
    p.add_argument("-a", type=float, default=DEFAULT_A, help="left endpoint")
    p.add_argument("-b", type=float, default=DEFAULT_B, help="right endpoint")
    p.add_argument("-n", type=int, default=DEFAULT_N, help="number of partitions")
    p.add_argument(
        "--rule",
        "-r",
        choices=[r.value for r in SamplingRule],
        default=None,
        help="sampling rule (default from RIEMANN_DEFAULT_RULE, midpoint)",
    )
    p.add_argument("--all-rules", action="store_true", help="compute left, right and midpoint sums")
    p.add_argument("--interactive", "-i", action="store_true", help="prompt for every parameter")
    p.add_argument(
        "--fallback-defaults",
        action="store_true",
        help="retry once with a=0, b=1, n=10 when the parameters are rejected",
    )
    p.add_argument("--transcript", default=None, help="append a plain-text transcript to this file")
    p.add_argument("--steps", action="store_true", help="echo every subinterval")
    p.add_argument("--json", action="store_true", help="print the result as JSON")
    p.add_argument("--list-functions", action="store_true", help="print the function menu and exit")
    p.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="logging level (default from RIEMANN_LOG_LEVEL)",
    )
    return p


def _format_outcome(key: FunctionKey, outcome: SessionOutcome) -> List[str]:
    request = outcome.request
    result = outcome.result
    lines = [
        f"Function: {get_entry(key).label}",
        f"Interval: [{request.a!r}, {request.b!r}]",
        f"Partitions: {request.n}",
        f"Rule: {request.rule.value}",
    ]

    if outcome.used_defaults:
        lines.append(f"Defaults substituted after {outcome.first_failure.value}")

    if not result.ok:
        lines.append(f"Failure: {result.failure.value} ({result.details})")
        return lines

    exact = exact_integral(key, request.a, request.b)
    lines.append(f"Riemann sum: {result.value!r}")
    lines.append(f"Exact value: {exact!r}")
    if is_valid_float(exact) and is_valid_float(result.value):
        lines.append(f"Absolute difference: {abs(result.value - exact)!r}")

    return lines


def _outcome_payload(key: FunctionKey, outcome: SessionOutcome) -> dict:
    request_payload = outcome.request.to_contract()
    result_payload = outcome.result.to_dict()
    validate_riemann_result(result_payload)

    # Отклонённый запрос может нарушать контракт (n=0, a=inf): без проверки и без exact
    exact = None
    if outcome.result.ok:
        validate_riemann_request(request_payload)
        value = exact_integral(key, outcome.request.a, outcome.request.b)
        exact = value if is_valid_float(value) else None
    return {
        "request": request_payload,
        "result": result_payload,
        "exact": exact,
        "used_defaults": outcome.used_defaults,
        "first_failure": outcome.first_failure.value if outcome.first_failure else None,
    }


def main(
    argv: Optional[Sequence[str]] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
    input_fn: Callable[[str], str] = input,
) -> int:
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    def out(line: str) -> None:
        stdout.write(line + "\n")

    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings, level=args.log_level, stream=stderr)
    config = EngineConfig.from_settings(settings)
    default_rule = settings.default_rule

    if args.list_functions:
        for line in render_menu():
            out(line)
        return 0

    if args.interactive:
        provider = InteractiveParameterProvider(
            input_fn=input_fn, output_fn=out, config=config, default_rule=default_rule
        )
        key = provider.choose_function()
        request = provider.collect()
    else:
        try:
            key = parse_function_key(args.function)
        except UnknownFunctionError as e:
            parser.error(str(e))
        rule = SamplingRule(args.rule) if args.rule else default_rule
        request = IntegrationRequest(a=args.a, b=args.b, n=args.n, rule=rule)

    transcript_path = args.transcript or settings.transcript_path

    with ExitStack() as stack:
        transcript = None
        if transcript_path:
            transcript = stack.enter_context(open(transcript_path, "a", encoding="utf-8"))
            transcript.write(f"{BANNER_LINE}\nStart Of Program\n{BANNER_LINE}\n")

        reporters = []
        if args.steps:
            reporters.append(LoggingReporter(logging.getLogger("src.app.steps"), level=logging.INFO))
            if transcript is not None:
                reporters.append(TranscriptReporter(transcript))

        session = IntegrationSession(
            engine=RiemannSumEngine(config),
            reporter=FanOutReporter(*reporters) if reporters else None,
        )
        f = get_entry(key).func

        rules = list(SamplingRule) if args.all_rules else [request.rule]
        outcomes = [
            session.run(
                f,
                request.model_copy(update={"rule": rule}),
                fallback_to_defaults=args.fallback_defaults,
            )
            for rule in rules
        ]

        text_blocks = [_format_outcome(key, outcome) for outcome in outcomes]

        if transcript is not None:
            for block in text_blocks:
                transcript.write("\n".join(block) + "\n")
            transcript.write(f"{BANNER_LINE}\nEnd Of Program\n{BANNER_LINE}\n")

    if args.json:
        payload = {
            "function": key.value,
            "results": [_outcome_payload(key, outcome) for outcome in outcomes],
        }
        out(json.dumps(payload, indent=2))
    else:
        for index, block in enumerate(text_blocks):
            if index:
                out("")
            for line in block:
                out(line)

    failed = [outcome.result for outcome in outcomes if not outcome.result.ok]
    for result in failed:
        stderr.write(f"error: {result.failure.value}: {result.details}\n")

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
