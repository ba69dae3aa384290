"""Command line interface (`cx-validate`)."""
