"""Performance benchmarking for HTML tokenization.

This module measures tokenizer throughput and memory use on a fixed set of
documents, compares it against the standard library ``html.parser`` and
tracks regressions between benchmark runs.
"""

import gc
import statistics
import time
from dataclasses import dataclass, field
from html.parser import HTMLParser
from typing import Any, Callable, Dict, List, Optional, Tuple

import psutil

from streaming_html_tokenizer.shared import get_logger

from .errors import TokenizeError
from .tokenizer import TokenStream

TOKENIZER_NAME = "streaming_html_tokenizer"
STDLIB_PARSER_NAME = "html.parser"
REGRESSION_THRESHOLD = 0.05  # Relative time change that counts as a change


@dataclass
class BenchmarkResult:
    """Result of a single benchmark run."""

    parser_name: str
    test_case: str
    processing_time_ms: float
    memory_used_mb: float
    characters_processed: int
    tokens_generated: int
    success: bool
    error_message: Optional[str] = None

    @property
    def characters_per_second(self) -> float:
        """Calculate characters processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.characters_processed * 1000.0) / self.processing_time_ms

    @property
    def tokens_per_second(self) -> float:
        """Calculate tokens generated per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.tokens_generated * 1000.0) / self.processing_time_ms


@dataclass
class BenchmarkSuite:
    """Collection of benchmark results with statistical analysis."""

    results: List[BenchmarkResult] = field(default_factory=list)
    suite_name: str = "HTML Tokenization Benchmark"
    timestamp: float = field(default_factory=time.time)

    def add_result(self, result: BenchmarkResult) -> None:
        """Add a benchmark result to the suite."""
        self.results.append(result)

    def get_results_by_parser(self, parser_name: str) -> List[BenchmarkResult]:
        """Get all results for a specific parser."""
        return [r for r in self.results if r.parser_name == parser_name]

    def get_results_by_test_case(self, test_case: str) -> List[BenchmarkResult]:
        """Get all results for a specific test case."""
        return [r for r in self.results if r.test_case == test_case]

    def get_statistics(self, parser_name: str, metric: str) -> Dict[str, float]:
        """Get statistical analysis for a parser and metric.

        Args:
            parser_name: Parser whose results are analysed
            metric: Name of a ``BenchmarkResult`` attribute or property

        Returns:
            min/max/mean/median/stdev/count, or an empty dict without data
        """
        values = [
            float(getattr(result, metric))
            for result in self.get_results_by_parser(parser_name)
            if result.success
        ]
        if not values:
            return {}

        return {
            "min": min(values),
            "max": max(values),
            "mean": statistics.mean(values),
            "median": statistics.median(values),
            "stdev": statistics.stdev(values) if len(values) > 1 else 0.0,
            "count": len(values)
        }

    def relative_speed(self, parser_name: str, baseline_name: str) -> Dict[str, float]:
        """Ratio of baseline time to parser time for each shared test case.

        Values above 1.0 mean ``parser_name`` was faster.
        """
        ratios = {}
        for test_case in sorted({r.test_case for r in self.results}):
            case_results = {
                r.parser_name: r for r in self.get_results_by_test_case(test_case)
                if r.success
            }
            parser = case_results.get(parser_name)
            baseline = case_results.get(baseline_name)
            if parser and baseline and parser.processing_time_ms > 0:
                ratios[test_case] = baseline.processing_time_ms / parser.processing_time_ms
        return ratios

    def generate_report(self) -> Dict[str, Any]:
        """Generate benchmark report."""
        parsers = sorted({r.parser_name for r in self.results})
        test_cases = sorted({r.test_case for r in self.results})

        report: Dict[str, Any] = {
            "suite_name": self.suite_name,
            "timestamp": self.timestamp,
            "total_results": len(self.results),
            "parsers": parsers,
            "test_cases": test_cases,
            "summary": {},
            "detailed_results": {}
        }

        for parser in parsers:
            parser_results = self.get_results_by_parser(parser)
            successful_results = [r for r in parser_results if r.success]
            report["summary"][parser] = {
                "total_runs": len(parser_results),
                "successful_runs": len(successful_results),
                "success_rate": len(successful_results) / len(parser_results),
                "performance": self.get_statistics(parser, "characters_per_second"),
                "memory": self.get_statistics(parser, "memory_used_mb")
            }

        for test_case in test_cases:
            report["detailed_results"][test_case] = {
                result.parser_name: {
                    "processing_time_ms": result.processing_time_ms,
                    "memory_used_mb": result.memory_used_mb,
                    "characters_per_second": result.characters_per_second,
                    "tokens_per_second": result.tokens_per_second,
                    "success": result.success,
                    "error": result.error_message
                }
                for result in self.get_results_by_test_case(test_case)
            }

        return report


class _CountingHTMLParser(HTMLParser):
    """Standard library parser that counts the events it sees."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=False)
        self.event_count = 0

    def _count(self, *args: Any) -> None:
        self.event_count += 1

    handle_starttag = handle_endtag = handle_startendtag = _count
    handle_data = handle_comment = handle_decl = _count


def _tokenize_with_stream(content: str) -> int:
    return sum(1 for _ in TokenStream(content))


def _tokenize_with_stdlib(content: str) -> int:
    parser = _CountingHTMLParser()
    parser.feed(content)
    parser.close()
    return parser.event_count


class TokenizationBenchmark:
    """Tokenization performance benchmark."""

    def __init__(
        self,
        correlation_id: Optional[str] = None,
        warmup_runs: int = 1,
        benchmark_runs: int = 5
    ) -> None:
        """Initialize benchmark.

        Args:
            correlation_id: Optional correlation ID for tracking
            warmup_runs: Number of warmup runs before benchmarking
            benchmark_runs: Number of benchmark runs to average
        """
        if warmup_runs < 0:
            raise ValueError("warmup_runs must be >= 0")
        if benchmark_runs < 1:
            raise ValueError("benchmark_runs must be >= 1")
        self.correlation_id = correlation_id
        self.warmup_runs = warmup_runs
        self.benchmark_runs = benchmark_runs
        self.logger = get_logger(__name__, correlation_id, "benchmark")
        self.parsers: Dict[str, Callable[[str], int]] = {
            TOKENIZER_NAME: _tokenize_with_stream,
            STDLIB_PARSER_NAME: _tokenize_with_stdlib,
        }
        self.test_cases = self._create_test_cases()

    def _create_test_cases(self) -> Dict[str, str]:
        """Create test documents for benchmarking."""
        return {
            "small_document": (
                "<!DOCTYPE html>\n<html><head><title>Page</title></head>"
                "<body><p class=\"lead\">Hello <b>world</b></p><br/></body></html>"
            ),
            "attribute_heavy": "".join(
                f'<input id="field-{i}" name=field{i} type=\'text\' '
                f'data-index="{i}" required disabled/>'
                for i in range(200)
            ),
            "comment_heavy": "".join(
                f"<!-- comment {i} with -- dashes --><span>{i}</span>"
                for i in range(200)
            ),
            "deeply_nested": "<div>" * 300 + "leaf" + "</div>" * 300,
            "large_document": self._generate_large_html(),
        }

    def _generate_large_html(self, rows: int = 1000) -> str:
        """Generate a large table-based document."""
        lines = ["<!DOCTYPE html>", "<html>", "<body>", "<table>"]
        for i in range(rows):
            lines.append(
                f'  <tr class="row-{i % 2}"><td>{i}</td>'
                f'<td><a href="/items/{i}">Item {i}</a></td></tr>'
            )
        lines.extend(["</table>", "</body>", "</html>"])
        return "\n".join(lines)

    def _measure_memory_usage(self) -> float:
        """Get current memory usage in MB."""
        process = psutil.Process()
        return process.memory_info().rss / 1024 / 1024

    def _run_once(
        self,
        parser_name: str,
        test_case: str,
        content: str
    ) -> BenchmarkResult:
        """Time a single parse of ``content``."""
        run = self.parsers[parser_name]

        gc.collect()
        memory_before = self._measure_memory_usage()
        start_time = time.perf_counter()

        try:
            tokens_generated = run(content)
            success = True
            error_message = None
        except TokenizeError as e:
            tokens_generated = 0
            success = False
            error_message = str(e)

        processing_time = (time.perf_counter() - start_time) * 1000
        memory_used = max(0.0, self._measure_memory_usage() - memory_before)

        return BenchmarkResult(
            parser_name=parser_name,
            test_case=test_case,
            processing_time_ms=processing_time,
            memory_used_mb=memory_used,
            characters_processed=len(content),
            tokens_generated=tokens_generated,
            success=success,
            error_message=error_message
        )

    def benchmark_case(
        self,
        parser_name: str,
        test_case: str,
        content: str
    ) -> BenchmarkResult:
        """Run warmups and timed runs, returning the averaged result."""
        for _ in range(self.warmup_runs):
            self._run_once(parser_name, test_case, content)

        run_results = [
            self._run_once(parser_name, test_case, content)
            for _ in range(self.benchmark_runs)
        ]
        successful_runs = [r for r in run_results if r.success]
        if not successful_runs:
            return run_results[0]

        return BenchmarkResult(
            parser_name=parser_name,
            test_case=test_case,
            processing_time_ms=statistics.mean(r.processing_time_ms for r in successful_runs),
            memory_used_mb=statistics.mean(r.memory_used_mb for r in successful_runs),
            characters_processed=len(content),
            tokens_generated=successful_runs[0].tokens_generated,
            success=True
        )

    def run_benchmark(self, include_external_parsers: bool = True) -> BenchmarkSuite:
        """Run the benchmark suite.

        Args:
            include_external_parsers: Whether to include ``html.parser`` for comparison

        Returns:
            BenchmarkSuite with one averaged result per parser and test case
        """
        suite = BenchmarkSuite()
        parsers_to_test = [TOKENIZER_NAME]
        if include_external_parsers:
            parsers_to_test.append(STDLIB_PARSER_NAME)

        self.logger.info(
            "Starting benchmark suite",
            extra={
                "test_cases": len(self.test_cases),
                "parsers": parsers_to_test,
                "benchmark_runs": self.benchmark_runs
            }
        )

        for test_case, content in self.test_cases.items():
            for parser_name in parsers_to_test:
                self.logger.debug(
                    "Benchmarking test case",
                    extra={"test_case": test_case, "parser": parser_name}
                )
                suite.add_result(self.benchmark_case(parser_name, test_case, content))

        self.logger.info(
            "Benchmark suite completed",
            extra={"total_results": len(suite.results)}
        )
        return suite

    def compare_performance(
        self,
        baseline_suite: BenchmarkSuite,
        current_suite: BenchmarkSuite
    ) -> Dict[str, Any]:
        """Compare performance between two benchmark suites.

        Args:
            baseline_suite: Baseline benchmark results
            current_suite: Current benchmark results

        Returns:
            Report of improvements and regressions beyond the threshold
        """
        improvements: Dict[str, Dict[str, float]] = {}
        regressions: Dict[str, Dict[str, float]] = {}

        for key, (baseline, current) in _pair_results(baseline_suite, current_suite).items():
            time_change = (
                (current.processing_time_ms - baseline.processing_time_ms)
                / baseline.processing_time_ms
            )
            entry = {
                "change_percent": time_change * 100,
                "baseline_time_ms": baseline.processing_time_ms,
                "current_time_ms": current.processing_time_ms
            }
            if time_change < -REGRESSION_THRESHOLD:
                improvements[key] = entry
            elif time_change > REGRESSION_THRESHOLD:
                regressions[key] = entry

        return {
            "baseline_timestamp": baseline_suite.timestamp,
            "current_timestamp": current_suite.timestamp,
            "improvements": improvements,
            "regressions": regressions,
            "summary": {
                "total_improvements": len(improvements),
                "total_regressions": len(regressions),
                "has_regressions": bool(regressions)
            }
        }


def _pair_results(
    baseline_suite: BenchmarkSuite,
    current_suite: BenchmarkSuite
) -> Dict[str, Tuple[BenchmarkResult, BenchmarkResult]]:
    """Match successful results of two suites by parser and test case."""
    current_by_key = {
        (r.parser_name, r.test_case): r for r in current_suite.results if r.success
    }
    pairs = {}
    for baseline in baseline_suite.results:
        current = current_by_key.get((baseline.parser_name, baseline.test_case))
        if current and baseline.success and baseline.processing_time_ms > 0:
            pairs[f"{baseline.parser_name}:{baseline.test_case}"] = (baseline, current)
    return pairs
