"""create-monorepo: scaffold a pnpm workspace from reusable templates."""

__version__ = "1.0.0"
