# SPDX-License-Identifier: MIT OR Apache-2.0
# SPDX-FileCopyrightText: The Hiero C++ SDK Contributors
"""GitHub Actions bots for contributor assignment and PR hygiene checks."""
