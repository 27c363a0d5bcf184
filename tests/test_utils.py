"""Tests for web_optimizer.utils helpers."""

from __future__ import annotations

import logging
from unittest import mock

import pytest
from django.test import override_settings

from web_optimizer.pipeline import Pipeline
from web_optimizer.storage.django_storage import DjangoStorageBackend
from web_optimizer.storage.local import LocalFileStorage
from web_optimizer.utils import (
    compute_content_hash,
    get_storage,
    import_attribute,
    load_pipeline,
)


class TestLoadPipeline:
    def test_explicit_path_configures_new_pipeline(self):
        """The configure callable receives a fresh Pipeline.

        Purpose: Verify load_pipeline() imports the dotted path and lets it
            register assets, returning a new instance on every call.
        Category: Normal case
        Target: load_pipeline(configure_path)
        Technique: Equivalence partitioning
        Test data: tests.pipelines.configure
        """
        first = load_pipeline("tests.pipelines.configure")
        second = load_pipeline("tests.pipelines.configure")

        assert isinstance(first, Pipeline)
        assert first is not second
        assert first.get_asset("/layout.html") is not None
        assert first.get_asset("/site.css") is not None
        assert ".html" in first.extensions

    @override_settings(WEB_OPTIMIZER={"PIPELINE": "tests.pipelines.configure"})
    def test_setting_used_when_no_path_given(self, caplog):
        with caplog.at_level(logging.INFO, logger="web_optimizer.utils"):
            pipeline = load_pipeline()

        assert len(pipeline) == 5
        assert "Loaded pipeline from tests.pipelines.configure" in caplog.text

    @override_settings(WEB_OPTIMIZER={})
    def test_no_setting_returns_empty_pipeline(self):
        pipeline = load_pipeline()

        assert len(pipeline) == 0

    def test_unknown_module_raises(self):
        with pytest.raises(ImportError):
            load_pipeline("tests.no_such_module.configure")

    def test_configure_called_with_pipeline(self):
        configure = mock.Mock()

        with mock.patch("web_optimizer.utils.import_attribute", return_value=configure):
            pipeline = load_pipeline("anything.configure")

        configure.assert_called_once_with(pipeline)


class TestGetStorage:
    def test_default_backend(self):
        assert isinstance(get_storage(), DjangoStorageBackend)

    @override_settings(
        WEB_OPTIMIZER={
            "STORAGE_BACKEND": "web_optimizer.storage.local.LocalFileStorage"
        }
    )
    def test_configured_backend(self):
        assert isinstance(get_storage(), LocalFileStorage)


class TestComputeContentHash:
    def test_full_digest_by_default(self):
        result = compute_content_hash(b"body{}")

        assert len(result) == 64
        assert result == compute_content_hash(b"body{}")

    def test_custom_length(self):
        assert len(compute_content_hash(b"body{}", 12)) == 12

    def test_different_content_differs(self):
        assert compute_content_hash(b"a") != compute_content_hash(b"b")


class TestImportAttribute:
    def test_imports_class(self):
        assert import_attribute("web_optimizer.pipeline.Pipeline") is Pipeline

    def test_missing_attribute_raises(self):
        with pytest.raises(AttributeError):
            import_attribute("web_optimizer.pipeline.Missing")

    def test_path_without_module_raises(self):
        with pytest.raises(ValueError):
            import_attribute("Pipeline")
