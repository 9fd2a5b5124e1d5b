from __future__ import annotations

from pathlib import Path
from typing import Any

from junitparser import TestCase, TestSuite, JUnitXml, Failure

from bddrun.results import ResultEvent


def pair_events(events: list[ResultEvent]) -> list[dict[str, Any]]:
    """Fold the event stream into one entry per unit.

    A passing event is a unit on its own; a failing event is always followed by
    its message event.
    """
    units: list[dict[str, Any]] = []
    i = 0
    while i < len(events):
        event = events[i]
        if event.passed:
            units.append({"name": event.name, "passed": True, "message": ""})
            i += 1
            continue
        message = events[i + 1].name if i + 1 < len(events) else ""
        units.append({"name": event.name, "passed": False, "message": message})
        i += 2
    return units


def write_junit(run_dir: Path, all_results: dict[str, dict[str, Any]]) -> Path:
    """Write junit.xml from per-spec results, return path.

    ``all_results`` maps spec name to ``{"events": [...], "duration_seconds": ...}``
    where events are ``{"name", "passed"}`` dicts.
    """
    xml = JUnitXml()

    for spec_name, spec_result in all_results.items():
        events = [ResultEvent(**e) for e in spec_result.get("events", [])]
        suite = TestSuite(spec_name)

        summary = spec_result.get("summary", {})
        for key in ("total", "passed", "failed"):
            val = summary.get(key)
            if val is not None:
                suite.add_property(f"events_{key}", str(val))

        for unit in pair_events(events):
            case = TestCase(unit["name"])
            case.classname = spec_name
            if not unit["passed"]:
                case.result = Failure(unit["message"])
            suite.add_testcase(case)

        # Counts are written even for suites without cases; time is set afterwards
        # because update_statistics resets it
        suite.update_statistics()
        suite.time = float(spec_result.get("duration_seconds") or 0.0)

        # Use append (not +=) to preserve properties and time
        xml.append(suite)

    junit_path = run_dir / "junit.xml"
    xml.write(str(junit_path), pretty=True)
    return junit_path


def generate_report(run_dir: Path) -> Path:
    """Render junit.xml → report.html using Jinja2 template, return path."""
    import yaml
    from jinja2 import Environment, FileSystemLoader

    junit_path = run_dir / "junit.xml"
    report_path = run_dir / "report.html"

    meta: dict = {}
    meta_path = run_dir / "meta.yaml"
    if meta_path.exists():
        meta = yaml.safe_load(meta_path.read_text()) or {}

    xml = JUnitXml.fromfile(str(junit_path))

    suites = []
    for suite in xml:
        cases = []
        for case in suite:
            result = None
            if case.result:
                result = {
                    "status": type(case.result[0]).__name__,
                    "message": case.result[0].message or "",
                }
            cases.append(
                {"name": case.name, "classname": case.classname, "result": result}
            )

        debug_log = ""
        debug_path = run_dir / suite.name / "debug.log"
        if debug_path.exists():
            debug_log = debug_path.read_text(encoding="utf-8")

        suites.append(
            {
                "name": suite.name,
                "tests": suite.tests,
                "failures": suite.failures,
                "errors": suite.errors,
                "time": suite.time,
                "properties": {p.name: p.value for p in suite.properties()},
                "cases": cases,
                "debug_log": debug_log,
            }
        )

    total_tests = sum(s["tests"] or 0 for s in suites)
    total_failures = sum(s["failures"] or 0 for s in suites)

    tmpl_dir = Path(__file__).parent / "templates"
    env = Environment(loader=FileSystemLoader(str(tmpl_dir)), autoescape=True)
    template = env.get_template("report.html.j2")

    html = template.render(
        suites=suites,
        total_tests=total_tests,
        total_failures=total_failures,
        total_passed=total_tests - total_failures,
        run_dir=str(run_dir),
        meta=meta,
    )
    report_path.write_text(html, encoding="utf-8")
    return report_path
