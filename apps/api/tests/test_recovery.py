"""
Tests for per-item recovery in report loops.
"""
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from apps.core.observability.metrics import metrics
from apps.reports.exceptions import MalformedData, MissingAsset
from apps.reports.recovery import recover_each


def skipped_count(element, reason):
    return metrics.report_items_skipped_total.labels(element=element, reason=reason)._value.get()


class TestRecoverEach:

    def test_failed_item_does_not_stop_siblings(self):
        items = [SimpleNamespace(record_id=str(i)) for i in range(3)]
        rendered = []

        def render(item):
            if item.record_id == '1':
                raise MissingAsset('Image file not found')
            rendered.append(item.record_id)

        failures = recover_each(items, render, report_kind='visit', element='photo')

        assert rendered == ['0', '2']
        assert len(failures) == 1
        assert failures[0].record_id == '1'
        assert failures[0].error_type == 'MissingAsset'
        assert failures[0].reason == 'Image file not found'

    def test_fallback_receives_item_and_error(self):
        item = SimpleNamespace(record_id='a1')
        seen = []

        def render(_):
            raise MalformedData('bad json')

        recover_each(
            [item], render,
            report_kind='visit',
            element='annotation',
            fallback=lambda failed, error: seen.append((failed, type(error))),
        )

        assert seen == [(item, MalformedData)]

    def test_failure_is_counted_and_logged(self):
        before = skipped_count('consent_signature', 'MissingAsset')

        def render(_):
            raise MissingAsset('Signature image could not be embedded')

        with patch('apps.reports.recovery.log_report_item_skipped') as mock_log:
            recover_each(
                [SimpleNamespace(record_id='c1')], render,
                report_kind='visit',
                element='consent_signature',
            )

        assert skipped_count('consent_signature', 'MissingAsset') == before + 1
        mock_log.assert_called_once()
        args, kwargs = mock_log.call_args
        assert args[:3] == ('visit', 'consent_signature', 'c1')
        assert kwargs['error_type'] == 'MissingAsset'

    def test_custom_record_id(self):
        def render(_):
            raise MissingAsset('gone')

        failures = recover_each(['left'], render, report_kind='portfolio', element='photo',
                                record_id=lambda side: 'item-9')

        assert failures[0].record_id == 'item-9'

    def test_unexpected_errors_propagate(self):
        def render(_):
            raise RuntimeError('boom')

        with pytest.raises(RuntimeError):
            recover_each([SimpleNamespace(record_id='x')], render, report_kind='visit', element='photo')
