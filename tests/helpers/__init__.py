"""Test helpers for graphql-projects."""
