#!/usr/bin/env python3
"""
Example script to persist a VM as an Orka image.

Usage: python create_image.py <vmid> [image_name]
"""

import logging
import sys

from orka_builder import LoggingUi, StepAction, StepContext, StepCreateImage, load_config, load_token

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')


def main():
    if len(sys.argv) < 2:
        print("Usage: python create_image.py <vmid> [image_name]")
        sys.exit(1)

    vmid = sys.argv[1]

    try:
        config = load_config()
        if len(sys.argv) > 2:
            config = config.model_copy(update={'image_name': sys.argv[2]})
        token = load_token()
    except (OSError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    context = StepContext(config=config, ui=LoggingUi('orka'), vmid=vmid, token=token)
    step = StepCreateImage()
    action = step.run(context)
    if action is StepAction.HALT:
        context.halted = True
    step.cleanup(context)

    if action is StepAction.HALT:
        print(f"Error: {context.error}")
        sys.exit(1)
    print("Image step finished.")


if __name__ == "__main__":
    main()
