"""Tests for the output generators and the command-line entry point.

Verifies that the reference season sheet produces the expected text
listing, CSV tables and PDF report.
"""

import csv
import json
import os
import sys

import fitz
import pytest

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from tournament_points.core.models import Standings
from tournament_points.core.standings import compute_standings
from tournament_points.core.output_generator import (
    format_standings_text, generate_standings_csv, generate_standings_text
)
from tournament_points.core.pdf_generator import generate_standings_pdf
from tournament_points.adapters.delimited_adapter import DelimitedAdapter
from tournament_points.process_standings import main, infer_source

REFERENCE_DIR = os.path.join(PROJECT_ROOT, 'tests', 'reference_data')
SEASON_CSV = os.path.join(REFERENCE_DIR, 'season_results.csv')
EXPECTED_TEXT = os.path.join(REFERENCE_DIR, 'standings_expected.txt')


@pytest.fixture(scope='module')
def season():
    """Compute the reference season once for all output tests."""
    return compute_standings(DelimitedAdapter().parse(SEASON_CSV))


def _read(path):
    with open(path) as f:
        return f.read()


class TestTextOutput:
    def test_matches_reference(self, season):
        assert format_standings_text(season) == _read(EXPECTED_TEXT)

    def test_generate_file(self, season, tmp_path):
        output = str(tmp_path / 'standings.txt')
        generate_standings_text(season, output)
        assert _read(output) == _read(EXPECTED_TEXT)

    def test_empty_standings(self):
        text = format_standings_text(Standings())
        assert text == ('Student Scores:\n'
                        'Entry, School, Tournaments, Total Points\n'
                        '\n'
                        'School Scores:\n'
                        'School, Total Points\n')


class TestCsvOutput:
    def test_student_table(self, season, tmp_path):
        output = str(tmp_path / 'student_scores.csv')
        generate_standings_csv(season.entrant_table(), output)
        with open(output, newline='') as f:
            rows = list(csv.reader(f))
        assert rows[0] == ['Entry', 'School', 'Tournaments',
                           'Fall Classic', 'Winter Open', 'Total Points']
        assert rows[1] == ['South Prep:Carol', 'South Prep', '2', '3', '5', '8']
        assert len(rows) == 7

    def test_school_table(self, season, tmp_path):
        output = str(tmp_path / 'school_scores.csv')
        generate_standings_csv(season.school_table(), output)
        with open(output, newline='') as f:
            rows = list(csv.reader(f))
        assert rows == [
            ['School', 'Fall Classic', 'Winter Open', 'Total Points'],
            ['North High', '8', '2', '10'],
            ['South Prep', '5', '5', '10'],
        ]


class TestPdfOutput:
    def test_contains_both_tables(self, season, tmp_path):
        output = str(tmp_path / 'standings.pdf')
        generate_standings_pdf(season, output, title='2024 Season Standings')

        doc = fitz.open(output)
        text = ''.join(page.get_text() for page in doc)
        page_count = doc.page_count
        doc.close()

        assert page_count == 2
        assert '2024 Season Standings' in text
        assert 'SCHOOL STANDINGS' in text
        assert 'STUDENT STANDINGS' in text
        assert 'North High' in text
        assert 'Carol' in text

    def test_long_table_continues_on_new_pages(self, tmp_path):
        rows = [
            DelimitedAdapter.build_rows(
                {'tournament': 0, 'year': 1, 'place': 2, 'entry': 3, 'school': 4},
                [['Open', '2024', str(i), f'Entrant {i}', f'School {i % 7}']])[0]
            for i in range(1, 121)
        ]
        output = str(tmp_path / 'long.pdf')
        generate_standings_pdf(compute_standings(rows), output)

        doc = fitz.open(output)
        page_count = doc.page_count
        last_page_text = doc[page_count - 1].get_text()
        doc.close()

        assert page_count > 2
        assert 'CONTINUED' in last_page_text
        assert f'Page {page_count} of {page_count}' in last_page_text

    def test_empty_standings_single_page(self, tmp_path):
        output = str(tmp_path / 'empty.pdf')
        generate_standings_pdf(Standings(), output)
        doc = fitz.open(output)
        assert doc.page_count == 1
        doc.close()


class TestCommandLine:
    def test_infer_source(self):
        assert infer_source('season.XLSX') == 'xlsx'
        assert infer_source('season.csv') == 'csv'
        assert infer_source('season.tsv') == 'tsv'
        assert infer_source('season.json') is None

    def test_infer_source_directory(self, tmp_path):
        assert infer_source(str(tmp_path)) == 'csv'

    def test_prints_standings(self, capsys):
        main(['--data', SEASON_CSV])
        out = capsys.readouterr().out
        assert 'Read 8 rows: 8 entrant records, 1 rows skipped' in out
        assert 'row 6: missing school' in out
        assert _read(EXPECTED_TEXT) in out

    def test_writes_output_files(self, tmp_path, capsys):
        main(['--data', SEASON_CSV, '--output', str(tmp_path), '--pdf'])
        for name in ('student_scores.csv', 'school_scores.csv',
                     'standings.txt', 'standings.pdf'):
            assert (tmp_path / name).exists(), name
        assert _read(str(tmp_path / 'standings.txt')) == _read(EXPECTED_TEXT)

    def test_school_map(self, tmp_path, capsys):
        school_map = tmp_path / 'schools.json'
        school_map.write_text(json.dumps({'south prep': 'North High'}))
        main(['--data', SEASON_CSV, '--school-map', str(school_map)])
        out = capsys.readouterr().out
        assert 'School map applied' in out
        assert 'North High:Carol' in out
        assert 'South Prep:Carol' not in out

    def test_missing_file_exits(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main(['--data', str(tmp_path / 'missing.csv')])
        assert exc.value.code == 1
        assert 'File not found' in capsys.readouterr().out

    def test_unknown_extension_exits(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(['--data', str(tmp_path / 'results.json')])
        assert exc.value.code == 1

    def test_directory_of_mixed_delimiters(self, tmp_path, capsys):
        (tmp_path / 'a.csv').write_text(
            'Tournament,Year,Place,Entry,School\nFirst,2025,1,Dana,East\n')
        (tmp_path / 'b.tsv').write_text(
            'Tournament\tYear\tPlace\tEntry\tSchool\nSecond\t2025\t1\tEli\tWest\n')
        main(['--source', 'csv', '--data', str(tmp_path)])
        out = capsys.readouterr().out
        assert 'Read 2 rows: 2 entrant records, 0 rows skipped' in out
        assert 'East:Dana' in out
        assert 'West:Eli' in out
