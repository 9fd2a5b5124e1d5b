from __future__ import annotations

import itertools
import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import yaml

from bddrun.config import RunConfig, SpecFileConfig
from bddrun.context import RunContext
from bddrun.executor import run
from bddrun.loader import load_spec
from bddrun.reporting.collector import ResultCollector
from bddrun.verbose import setup_logger

_logger_ids = itertools.count(1)


def _close_logger(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


class Runner:
    """Runs every configured spec file, each in its own RunContext."""

    def __init__(
        self,
        config: RunConfig,
        output_dir: Path,
        spec_filter: str | None = None,
        verbose: bool = False,
    ):
        self.config = config
        self.output_dir = output_dir
        self.spec_filter = spec_filter
        self.verbose = verbose
        self.summary: dict[str, int] = {"total": 0, "passed": 0, "failed": 0}

    @property
    def all_passed(self) -> bool:
        return self.summary["failed"] == 0

    def execute(self) -> Path:
        """Run all specs sequentially. Returns the run directory."""
        run_id = datetime.now(timezone.utc).strftime("%Y-%m-%d_%H%M%S")
        run_dir = self.output_dir / run_id
        run_dir.mkdir(parents=True, exist_ok=True)
        logger_id = next(_logger_ids)

        logger = setup_logger(
            run_dir / "debug.log",
            verbose=self.verbose,
            logger_name=f"bddrun_main_{logger_id}",
        )
        logger.debug("Starting run")

        specs = self.config.specs
        if self.spec_filter:
            specs = [s for s in specs if s.display_name == self.spec_filter]
            if not specs:
                _close_logger(logger)
                raise ValueError(f"No spec named '{self.spec_filter}' in config")

        print(f"Running {len(specs)} spec file(s)...")

        all_results: dict[str, dict[str, Any]] = {}
        try:
            for index, spec in enumerate(specs, start=1):
                spec_logger = setup_logger(
                    run_dir / spec.display_name / "debug.log",
                    verbose=self.verbose,
                    logger_name=f"bddrun_{logger_id}_{spec.display_name}",
                )
                try:
                    result = self._run_spec(spec, spec_logger)
                except Exception as e:
                    logger.error(f"Spec '{spec.display_name}' failed to register: {e}")
                    raise
                finally:
                    _close_logger(spec_logger)

                all_results[spec.display_name] = result
                summary = result["summary"]
                status = "PASS" if summary["failed"] == 0 else "FAIL"
                print(
                    f"  [{index}/{len(specs)}] {status}  {spec.display_name} "
                    f"({summary['passed']}/{summary['total']} events passed, "
                    f"{result['duration_seconds']:.2f}s)"
                )
                for key in self.summary:
                    self.summary[key] += summary[key]

            self._write_results(run_dir, all_results, specs)
            logger.debug(
                f"Run finished: {self.summary['passed']}/{self.summary['total']} events passed"
            )
        finally:
            _close_logger(logger)

        return run_dir

    def _run_spec(self, spec: SpecFileConfig, logger: logging.Logger) -> dict[str, Any]:
        """Register and execute a single spec file in a fresh context."""
        ctx = RunContext()
        logger.debug(f"Loading spec '{spec.display_name}' from {spec.path}")
        load_spec(Path(spec.path), ctx)
        logger.debug(
            f"Registered {len(ctx.hooks)} hook(s) and {len(ctx.tests())} test(s)"
        )

        collector = ResultCollector()
        started = time.monotonic()
        run(ctx, collector, logger=logger)
        duration = time.monotonic() - started

        summary = collector.summary()
        logger.debug(
            f"Spec '{spec.display_name}' completed: "
            f"{summary.passed}/{summary.total} events passed"
        )
        return {
            "path": spec.path,
            "events": [e.to_dict() for e in collector.events],
            "summary": summary.to_dict(),
            "duration_seconds": duration,
        }

    def _write_results(
        self,
        run_dir: Path,
        all_results: dict[str, dict[str, Any]],
        specs: list[SpecFileConfig],
    ) -> None:
        """Write junit.xml and meta.yaml to the run directory."""
        from bddrun.reporting.junit import write_junit

        write_junit(run_dir, all_results)

        try:
            import importlib.metadata

            bddrun_version = importlib.metadata.version("bddrun")
        except Exception:
            bddrun_version = "unknown"

        meta: dict[str, Any] = {
            "run_id": run_dir.name,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "specs": [s.display_name for s in specs],
            "bddrun_version": bddrun_version,
            "summary": dict(self.summary),
        }

        (run_dir / "meta.yaml").write_text(yaml.dump(meta, default_flow_style=False))
