"""
Example demonstrating the styleguide-loader library.

This script creates a sample project with its own guide entries and shows how
to use StyleGuideLoaderContext to load them on top of the bundled guide.
"""

import shutil
import tempfile
from pathlib import Path

from styleguide_loader import StyleGuideLoaderContext


def create_example_project() -> Path:
    """Create a temporary example project."""
    project_dir = Path(tempfile.mkdtemp(prefix="styleguide_example_"))

    guide_dir = project_dir / ".styleguide"
    guide_dir.mkdir()

    (guide_dir / "rails.yaml").write_text("""---
- :rule: "Prefer `find_by` over `where(...).first`"
  :why: "It states the intent and stops at the first match"
  :example: |
    # Wrong
    User.where(:email => email).first

    # Right
    User.find_by(:email => email)
""")

    (project_dir / "styleguide.local.yaml").write_text("""---
- :rule: "Keep controller actions under ten lines"
  :why: "Long actions hide business logic that belongs in a model or service"
""")

    return project_dir


def main() -> None:
    """Run the example."""
    print("Creating example project...")
    project_dir = create_example_project()

    try:
        print(f"\nProject created at: {project_dir}")
        print("\nGuide files:")
        for path in sorted(project_dir.rglob("*.yaml")):
            print(f"  {path.relative_to(project_dir)}")

        ctx = StyleGuideLoaderContext(project_dir)
        guide = ctx.load_guide()

        print("\n" + "=" * 60)
        print(f"Loaded {len(guide)} entries:")
        print("=" * 60 + "\n")
        for number, entry in enumerate(guide, start=1):
            marker = " (example)" if entry.has_example else ""
            print(f"{number:2}. {entry.rule}{marker}")

        print("\n" + "=" * 60)
        print("Rendered as Markdown (last entry):")
        print("=" * 60 + "\n")
        print(ctx.load_markdown().split("\n## ")[-1])

    finally:
        print(f"\nCleaning up temporary directory: {project_dir}")
        shutil.rmtree(project_dir)


if __name__ == "__main__":
    main()
