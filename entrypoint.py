"""
Container entry point.

Inputs are passed the same way as to the console script: positional FILES
plus options, or LICENSE_VETTING_* environment variables set by the
workflow. The process exit status is the vetting status, so a step fails
when any dependency still needs review.
"""

from license_vetting.cli.main import main

if __name__ == "__main__":
    main()
