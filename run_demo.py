"""
End-to-end walkthrough of document prefill and prediction submission.

This script exercises:
1. Configuration loading and validation
2. Reconciliation of realistic (and messy) extraction records
3. The prefill workflow against an in-process fake backend
4. Error handling when the backend fails

Run with: uv run python run_demo.py
"""

import asyncio
import json
import logging

import httpx
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from core.config import get_config, print_config_summary, validate_config
from core.domain.models import ReconciledRecord, TargetField, default_record
from core.services.prediction_api import DiabetesApiClient
from core.services.prefill import PrefillService
from core.services.reconciler import reconcile_with_report

console = Console()

SCENARIOS: dict[str, dict[str, object]] = {
    "clean lab sheet": {
        "Pregnancies": "2",
        "Glucose": 148,
        "Diabetes Pedigree Function": "0.627",
        "unrelatedNote": "n/a",
    },
    "synonyms and conflicts": {
        "bloodPressure": 80,
        "Systolic": "120",
        "Triceps Skin": "35",
        "DPF": ".351",
        "B.M.I.": "33.6",
    },
    "misread document": {
        "Glucose": "abc",
        "Age": "fifty",
        "favoriteColor": "blue",
        "Insulin": {"value": 94},
    },
}


def record_table(title: str, record: ReconciledRecord) -> Table:
    table = Table(title=title)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    for field in TargetField:
        table.add_row(field.label, f"{record.get(field):g}")
    return table


def fake_backend(extracted: dict[str, object], fail_predict: bool = False) -> httpx.MockTransport:
    """Transport standing in for the extraction/prediction backend."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/extract":
            return httpx.Response(200, json={"extracted": extracted})
        if request.url.path == "/predict":
            if fail_predict:
                return httpx.Response(500, json={"error": "model not loaded"})
            payload = json.loads(request.content)
            return httpx.Response(200, json={"prediction": int(payload["glucose"] >= 140)})
        return httpx.Response(404)

    return httpx.MockTransport(handler)


async def demo_configuration() -> bool:
    """Load and show the active configuration."""

    console.print(Panel("🔧 Configuration", style="blue"))

    try:
        validate_config()
        print_config_summary()
        return True

    except Exception as e:
        console.print(f"❌ Configuration failed: {e}", style="red")
        return False


async def demo_reconciliation() -> bool:
    """Reconcile each sample extraction and show the coverage signal."""

    console.print(Panel("🧮 Reconciliation", style="blue"))

    for name, raw in SCENARIOS.items():
        report = reconcile_with_report(raw)
        console.print(record_table(name, report.record))
        console.print(
            f"coverage {report.coverage:.0%} | ignored {list(report.ignored_labels)} | "
            f"invalid {[f.value for f in report.invalid]} | "
            f"overridden {[f.value for f in report.overridden]}",
            style="yellow",
        )
    return True


async def demo_workflow() -> bool:
    """Prefill a form from a fake upload, keep a user-entered value, and submit."""

    console.print(Panel("🚀 Prefill and Submit", style="blue"))

    config = get_config()
    transport = fake_backend(SCENARIOS["clean lab sheet"])
    client = DiabetesApiClient(config.service, transport=transport)
    service = PrefillService(extractor=client, predictor=client)

    # The user typed an age before uploading; the document has none.
    form = default_record().with_values({TargetField.AGE: 50})

    prefilled = await service.prefill_from_document(b"\x89PNG...", "lab.png", "image/png")
    if prefilled.is_err():
        console.print(f"❌ {prefilled.unwrap_err().notification}", style="red")
        return False

    form = prefilled.unwrap().apply_to(form)
    console.print(record_table("form after prefill", form))

    submitted = await service.submit(form)
    if submitted.is_err():
        console.print(f"❌ {submitted.unwrap_err().notification}", style="red")
        return False

    console.print(f"✅ Prediction: {submitted.unwrap().prediction}", style="green")
    return True


async def demo_error_handling() -> bool:
    """Failures surface as notifications, never as exceptions."""

    console.print(Panel("🛡️ Error Handling", style="blue"))

    config = get_config()
    client = DiabetesApiClient(config.service, transport=fake_backend({}, fail_predict=True))
    service = PrefillService(extractor=client, predictor=client)

    empty_upload = await service.prefill_from_document(b"", "empty.png")
    failed_submit = await service.submit(default_record())

    ok = empty_upload.is_err() and failed_submit.is_err()
    for result in (empty_upload, failed_submit):
        if result.is_err():
            console.print(f"⚠️  {result.unwrap_err().notification}", style="yellow")
    return ok


async def run_all_demos() -> None:
    """Run every demo section."""

    logging.basicConfig(level=get_config().logging.level)
    console.print(Panel("🩺 Diabetes Prefill - Walkthrough", style="bold blue"))

    demos = [
        ("Configuration", demo_configuration),
        ("Reconciliation", demo_reconciliation),
        ("Prefill and Submit", demo_workflow),
        ("Error Handling", demo_error_handling),
    ]

    results = []

    for demo_name, demo_func in demos:
        console.print(f"\n{'=' * 60}")
        try:
            result = await demo_func()
            results.append((demo_name, result))
        except KeyboardInterrupt:
            console.print("\n⏹️  Demo interrupted by user", style="yellow")
            break
        except Exception as e:
            console.print(f"❌ {demo_name} failed with exception: {e}", style="red")
            results.append((demo_name, False))

    # Summary
    console.print(f"\n{'=' * 60}")
    summary_table = Table(title="Summary")
    summary_table.add_column("Section", style="cyan")
    summary_table.add_column("Result", style="white")

    for demo_name, result in results:
        summary_table.add_row(demo_name, "✅ OK" if result else "❌ FAILED")

    console.print(summary_table)


if __name__ == "__main__":
    try:
        asyncio.run(run_all_demos())
    except KeyboardInterrupt:
        console.print("\n👋 Stopped by user", style="yellow")
