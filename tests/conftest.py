"""Shared test fixtures for Metadelta."""

from __future__ import annotations

import json

import pytest

from metadelta import Artifact, RuleTable
from metadelta.config import reset_settings


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    """Keep METADELTA_* variables and .env files from leaking into tests."""
    for var in ("METADELTA_API_VERSION", "METADELTA_RULES_FILE", "METADELTA_LOG_DIR", "METADELTA_PACKAGE_ROOT"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def rules():
    return RuleTable.default()


@pytest.fixture
def source_artifacts():
    """Left (source org) snapshot."""
    return [
        Artifact("ApexClass", "AccountService", left_content="public class AccountService {\n}\n"),
        Artifact("ApexClass", "AccountService-meta", left_content="<ApexClass>\n  <apiVersion>58.0</apiVersion>\n</ApexClass>"),
        Artifact("ApexClass", "NewHelper", left_content="public class NewHelper {}"),
        Artifact("CustomObject", "Account", left_content="<CustomObject/>"),
        Artifact("CustomField", "Account.Phone", left_content="<CustomField>Phone</CustomField>"),
        Artifact("CustomField", "Account.Rating__c", left_content="<CustomField>Rating</CustomField>"),
        Artifact("Layout", "Account.Account Layout", left_content="<Layout/>"),
        Artifact("LightningComponentBundle", "accountCard", left_content=""),
        Artifact("LightningComponentBundle", "accountCard/accountCard.js", left_content="export default class {}"),
        Artifact("LightningComponentBundle", "accountCard/accountCard.html", left_content="<template></template>"),
        Artifact("Profile", "Admin", left_content="<Profile/>"),
    ]


@pytest.fixture
def target_artifacts():
    """Right (target org) snapshot."""
    return [
        Artifact("ApexClass", "AccountService", right_content="public class AccountService {\n  // old\n}\n"),
        Artifact("ApexClass", "AccountService-meta", right_content="<ApexClass>\n  <apiVersion>58.0</apiVersion>\n</ApexClass>"),
        Artifact("ApexClass", "LegacyJob", right_content="public class LegacyJob {}"),
        Artifact("CustomObject", "Account", right_content="<CustomObject/>"),
        Artifact("CustomField", "Account.Phone", right_content="<CustomField>Phone (old)</CustomField>"),
        Artifact("Profile", "Admin", right_content="<Profile/>"),
    ]


def _dump(artifacts, side):
    records = []
    for a in artifacts:
        records.append({
            "type": a.artifact_type,
            "name": a.name,
            "content": a.left_content if side == "left" else a.right_content,
            "modified_by": "Deploy User",
        })
    return {"artifacts": records}


@pytest.fixture
def snapshot_files(tmp_path, source_artifacts, target_artifacts):
    """Write both snapshots as JSON files and return their paths."""
    left = tmp_path / "source.json"
    right = tmp_path / "target.json"
    left.write_text(json.dumps(_dump(source_artifacts, "left"), indent=2))
    right.write_text(json.dumps(_dump(target_artifacts, "right"), indent=2))
    return left, right
