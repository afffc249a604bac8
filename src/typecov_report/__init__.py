"""typecov-report — static HTML reports for TypeScript type coverage."""

__version__ = "0.1.0"
