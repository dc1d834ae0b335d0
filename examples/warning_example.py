"""
Example showing how malformed guides and missing files are reported.
"""

import shutil
import tempfile
import warnings
from pathlib import Path

from styleguide_loader import GuideFormatError, StyleGuideLoaderContext, validate_file


def main() -> None:
    project_dir = Path(tempfile.mkdtemp(prefix="warning_example_"))

    try:
        # One entry is missing its rationale
        broken = project_dir / "styleguide.local.yaml"
        broken.write_text("""---
- :rule: "Use `fetch` for required hash keys"
  :why: "A missing key fails loudly instead of returning nil"
- :rule: "Never use `and`/`or` for control flow"
""")

        print("1. Default loading (malformed file skipped, warning emitted):\n")
        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter("always")

            ctx = StyleGuideLoaderContext(project_dir)
            guide = ctx.load_guide(extra_guide_files=["missing.yaml"])

            print(f"Loaded {len(guide)} entries")
            for warning in w:
                print(f"  - {warning.category.__name__}: {warning.message}")

        print("\n" + "=" * 60)
        print("\n2. Strict loading:\n")
        try:
            StyleGuideLoaderContext(project_dir, strict=True).load_guide()
        except GuideFormatError as e:
            print(f"GuideFormatError: {e}")

        print("\n" + "=" * 60)
        print("\n3. Full validation report:\n")
        result = validate_file(broken)
        print(f"valid: {result.is_valid}")
        for message in result.errors:
            print(f"  error: {message}")

    finally:
        shutil.rmtree(project_dir)


if __name__ == "__main__":
    main()
