#!/usr/bin/env python3
"""
Complete Pipeline Demo: forms → analysis → transform → source

Shows the full workflow:
1. Build the example family module (as a parser would)
2. Analyze it
3. Run the rule transform
4. Print the rewritten source and its diagnostics
"""

from henshin.analyzer import analyze_forms
from henshin.backends import generate_source
from henshin.errors import format_diagnostic
from henshin.examples import build_example_family_module
from henshin.model import FormKind
from henshin.transform import parse_transform


def main():
    print("=" * 80)
    print("COMPLETE PIPELINE DEMO: forms → analysis → transform → source")
    print("=" * 80)

    # =========================================================================
    # STEP 1: Build forms
    # =========================================================================
    print("\n1. BUILDING FORMS...")
    forms = build_example_family_module(with_errors=True)
    print(f"   ✓ Forms: {len(forms)}")

    # =========================================================================
    # STEP 2: Analyze
    # =========================================================================
    print("\n2. ANALYZING FORMS...")
    report = analyze_forms(forms)
    print(f"   ✓ Module: {report.module_name}")
    print(f"   ✓ Rules: {', '.join(str(na) for na in report.rules)}")
    print(f"   ✓ Generators: {report.generators}")
    if report.warnings:
        print(f"\n   Warnings ({len(report.warnings)}):")
        for warning in report.warnings:
            print(f"      - {warning}")

    # =========================================================================
    # STEP 3: Transform
    # =========================================================================
    print("\n3. TRANSFORMING...")
    out = parse_transform(forms)
    print(f"   ✓ Output forms: {len(out)}")

    # =========================================================================
    # STEP 4: Source and diagnostics
    # =========================================================================
    print("\n4. REWRITTEN SOURCE:")
    print("-" * 80)
    for line in generate_source(out).splitlines():
        print(f"   {line}")

    print("\n5. DIAGNOSTICS:")
    print("-" * 80)
    for form in out:
        if form.kind is FormKind.ERROR_MARKER:
            print(f"   {format_diagnostic(form, 'family.erl')}")


if __name__ == "__main__":
    main()
