import os
from pathlib import Path

from fitlog2tcx.appconfig import DEFAULT_CONFIG, save_config, validate_config


def _ask_yes_no(prompt: str, default: bool) -> bool:
    hint = "Y/n" if default else "y/N"
    answer = input(f"{prompt} ({hint}): ").strip().lower()
    if not answer:
        return default
    return answer == "y"


def _ask_indent() -> int:
    while True:
        answer = input("Indentation (number of spaces, 0 for none, default: 2): ").strip()
        if not answer:
            return 2
        if answer.isascii() and answer.isdigit():
            return int(answer)
        print("Please enter a whole number of spaces (0 or more).")


def run():
    print("Welcome to fitlog2tcx configuration!")
    config = dict(DEFAULT_CONFIG)

    config["debug"] = _ask_yes_no("\nEnable debug logging?", DEFAULT_CONFIG["debug"])

    print("\n--- TCX Output ---")
    config["include_creator"] = _ask_yes_no(
        "Add the Forerunner 305 Creator block to every activity?", DEFAULT_CONFIG["include_creator"]
    )
    config["tcx_namespace"] = _ask_yes_no(
        "Declare the Garmin TCX v2 namespace on the root element?", DEFAULT_CONFIG["tcx_namespace"]
    )
    config["indent"] = " " * _ask_indent()

    print("\n--- Distance Markers ---")
    print("legacy:    the first marker is applied to the second lap (historical behaviour)")
    print("corrected: the first marker is applied to the first lap")
    indexing = input("Marker indexing (default: legacy): ").strip().lower()
    config["marker_indexing"] = indexing or "legacy"

    validate_config(config)
    config_path = save_config(config, Path(os.path.abspath("fitlog2tcx_config.json")))
    print(f"\nConfiguration saved to {config_path}")
