"""Business logic for the youth profile service.

Modules:
  - age_policy.py        — age calculation and derived policy flags
  - address_validator.py — postal code rules, address checks and formatting
  - rule_set.py          — per-field required/optional/hidden rules
  - reconciler.py        — Profile -> Draft normalization, Draft -> requests
  - submission.py        — single-flight submission guard
  - profile_editor.py    — create/edit session orchestration
"""
