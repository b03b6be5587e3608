"""Generate example scenario bundles for testing and demonstration."""

from pathlib import Path

# Add src to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from solarhub_engine.io.bundle import init_bundle
from solarhub_engine.io.templates import TEMPLATES


def generate(template_name: str) -> None:
    """Write one template bundle under examples/bundles/."""
    print(f"Generating {template_name} bundle...")

    site_config, run_config, load_profile, weather = TEMPLATES[template_name]()

    bundle_path = Path(__file__).parent.parent / "examples" / "bundles" / template_name
    init_bundle(bundle_path, site_config, run_config, load_profile, weather)
    print(f"✓ Created {bundle_path}")


if __name__ == "__main__":
    print("Generating example bundles...\n")
    for name in TEMPLATES:
        generate(name)
    print("\n✓ All example bundles generated")
