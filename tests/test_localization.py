#!/usr/bin/env python3
"""
Unit tests for the xboxkit/repositories and xboxkit/services localization layer.

Run with:
    python -m pytest tests/test_localization.py
"""
import json
import os
import shutil
import sys
import tempfile
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from xboxkit.errors import ReferenceDataError
from xboxkit.models import Language, Market
from xboxkit.repositories import LocalizationRepository
from xboxkit.services import LocalizationService, get_localization, load_localization


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

MARKETS = [
    {'isoCode': 'US', 'name': 'United States', 'threeLetterISO': 'USA'},
    {'isoCode': 'CA', 'name': 'Canada', 'threeLetterISO': 'CAN'},
    {'isoCode': 'GB', 'name': 'United Kingdom'},
]
LANGUAGES = [
    {'localeCode': 'fr-CA', 'bcp47Tag': 'fr-CA', 'nativeName': 'français (Canada)'},
    {'localeCode': 'en-US', 'bcp47Tag': 'en-US', 'nativeName': 'English (United States)'},
    {'localeCode': 'en-CA', 'bcp47Tag': 'en-CA', 'nativeName': 'English (Canada)'},
    {'localeCode': 'en-GB', 'bcp47Tag': 'en-GB', 'nativeName': 'English (United Kingdom)'},
    {'localeCode': 'fr', 'bcp47Tag': 'fr', 'nativeName': 'français'},
]


class TmpDataDirMixin(unittest.TestCase):
    """Creates a fresh data directory for each test."""

    def setUp(self):
        self.tmp = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmp, ignore_errors=True)

    def _write(self, name, data):
        with open(os.path.join(self.tmp, name), 'w', encoding='utf-8') as fh:
            if isinstance(data, str):
                fh.write(data)
            else:
                json.dump(data, fh)

    def _write_tables(self, markets=MARKETS, languages=LANGUAGES):
        self._write('market-data.json', markets)
        self._write('language-data.json', languages)


# ===========================================================================
# Language model
# ===========================================================================

class TestLocaleSplit(unittest.TestCase):

    def test_language_and_region(self):
        lang = Language('en-US', 'en-US', 'English')
        self.assertEqual(lang.language_code, 'en')
        self.assertEqual(lang.region_code, 'US')

    def test_no_separator(self):
        lang = Language('en', 'en', 'English')
        self.assertEqual(lang.language_code, 'en')
        self.assertIsNone(lang.region_code)

    def test_region_is_last_segment(self):
        lang = Language('zh-Hant-TW', 'zh-Hant-TW', '中文')
        self.assertEqual(lang.language_code, 'zh')
        self.assertEqual(lang.region_code, 'TW')

    def test_trailing_separator_has_no_region(self):
        self.assertIsNone(Language('en-', 'en', 'English').region_code)


# ===========================================================================
# Repository
# ===========================================================================

class TestLocalizationRepository(TmpDataDirMixin):

    def test_sorted_by_code(self):
        self._write_tables()
        repo = LocalizationRepository(self.tmp)
        self.assertEqual([m.iso_code for m in repo.markets], ['CA', 'GB', 'US'])
        self.assertEqual([lang.locale_code for lang in repo.languages],
                         ['en-CA', 'en-GB', 'en-US', 'fr', 'fr-CA'])

    def test_optional_three_letter_code(self):
        self._write_tables()
        repo = LocalizationRepository(self.tmp)
        gb = [m for m in repo.markets if m.iso_code == 'GB'][0]
        self.assertIsNone(gb.three_letter_iso)

    def test_missing_file_raises(self):
        self._write('market-data.json', MARKETS)
        with self.assertRaises(ReferenceDataError) as ctx:
            LocalizationRepository(self.tmp)
        self.assertTrue(ctx.exception.path.endswith('language-data.json'))

    def test_malformed_json_raises(self):
        self._write_tables()
        self._write('market-data.json', '{not json')
        with self.assertRaises(ReferenceDataError):
            LocalizationRepository(self.tmp)

    def test_missing_key_raises(self):
        self._write_tables(markets=[{'isoCode': 'US'}])
        with self.assertRaises(ReferenceDataError):
            LocalizationRepository(self.tmp)

    def test_not_a_list_raises(self):
        self._write_tables(markets={'US': 'United States'})
        with self.assertRaises(ReferenceDataError):
            LocalizationRepository(self.tmp)

    def test_duplicate_code_raises(self):
        self._write_tables(markets=MARKETS + [{'isoCode': 'us', 'name': 'Again'}])
        with self.assertRaises(ReferenceDataError):
            LocalizationRepository(self.tmp)


# ===========================================================================
# Service
# ===========================================================================

class TestLocalizationService(TmpDataDirMixin):

    def setUp(self):
        super().setUp()
        self._write_tables()
        self.svc = load_localization(self.tmp)

    def test_market_lookup_case_insensitive(self):
        self.assertEqual(self.svc.market('us'), self.svc.market('US'))
        self.assertEqual(self.svc.market('Us').name, 'United States')

    def test_language_lookup_case_insensitive(self):
        self.assertIs(self.svc.language('EN-us'), self.svc.language('en-US'))

    def test_unknown_lookups(self):
        self.assertIsNone(self.svc.market('XX'))
        self.assertIsNone(self.svc.language('xx-XX'))

    def test_membership(self):
        self.assertTrue(self.svc.is_supported_market('ca'))
        self.assertFalse(self.svc.is_supported_market('DE'))
        self.assertTrue(self.svc.is_supported_locale('EN-GB'))
        self.assertTrue(self.svc.is_valid_market('US', 'en-us'))
        self.assertFalse(self.svc.is_valid_market('US', 'de-DE'))

    def test_languages_in_market(self):
        codes = [lang.locale_code for lang in self.svc.languages_in('ca')]
        self.assertEqual(codes, ['en-CA', 'fr-CA'])

    def test_languages_in_accepts_market_record(self):
        us = self.svc.market('US')
        self.assertEqual([lang.locale_code for lang in self.svc.languages_in(us)], ['en-US'])

    def test_markets_speaking(self):
        self.assertEqual([m.iso_code for m in self.svc.markets_speaking('en')],
                         ['CA', 'GB', 'US'])
        self.assertEqual([m.iso_code for m in self.svc.markets_speaking('fr-FR')], ['CA'])

    def test_markets_speaking_accepts_language_record(self):
        fr = self.svc.language('fr')
        self.assertEqual([m.iso_code for m in self.svc.markets_speaking(fr)], ['CA'])

    def test_default_language(self):
        self.assertEqual(self.svc.default_language('CA').locale_code, 'en-CA')
        self.assertIsNone(self.svc.default_language('DE'))

    def test_is_service_instance(self):
        self.assertIsInstance(self.svc, LocalizationService)


class TestBundledTables(unittest.TestCase):

    def test_default_instance_is_shared(self):
        self.assertIs(get_localization(), get_localization())

    def test_bundled_tables_load(self):
        loc = get_localization()
        self.assertIsInstance(loc.market('US'), Market)
        self.assertEqual(loc.market('us').three_letter_iso, 'USA')
        for locale in ('en-US', 'en-GB', 'de-DE', 'fr-FR'):
            self.assertTrue(loc.is_supported_locale(locale.lower()), locale)

    def test_every_language_region_is_a_market(self):
        loc = get_localization()
        for lang in loc.languages:
            if lang.region_code:
                self.assertTrue(loc.is_supported_market(lang.region_code), lang.locale_code)

    def test_russian_locale_has_market(self):
        loc = get_localization()
        self.assertEqual(loc.market('RU').three_letter_iso, 'RUS')
        self.assertEqual([m.iso_code for m in loc.markets_speaking('ru')], ['RU'])

    def test_lookup_same_record_any_case(self):
        loc = get_localization()
        for market in loc.markets:
            self.assertIs(loc.market(market.iso_code.lower()), market)
        for lang in loc.languages:
            self.assertIs(loc.language(lang.locale_code.upper()), lang)


if __name__ == '__main__':
    unittest.main()
