"""Tests for the rank_stats command line entry point."""

import os

import pytest

from rank_stats import build_parser, config_from_args, main
from statrank import DEFAULT_LIMIT

from conftest import P3

IS_ROOT = hasattr(os, 'geteuid') and os.geteuid() == 0


class TestParser:
    """Tests for argument parsing."""

    def test_defaults(self):
        args = build_parser().parse_args(['-k', 'jump'])
        config = config_from_args(args)
        assert config.key.pattern == 'jump'
        assert config.key.exact is False
        assert config.limit == DEFAULT_LIMIT
        assert str(config.path) == '.'
        assert config.inverse is False
        assert config.show_uuid is False

    def test_key_required(self):
        with pytest.raises(SystemExit) as exc:
            build_parser().parse_args([])
        assert exc.value.code == 2

    def test_negative_limit_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(['-k', 'jump', '-l', '-3'])

    def test_short_flags(self):
        args = build_parser().parse_args(['-k', 'x', '-e', '-i', '-s', '-l', '5', '-p', '/srv'])
        config = config_from_args(args)
        assert config.key.exact and config.inverse and config.show_uuid
        assert config.limit == 5


class TestMain:
    """End-to-end runs against a fake server directory."""

    def test_default_ranking(self, server_dir, capsys):
        code = main(['-k', 'minecraft:jump', '-e', '-p', str(server_dir)])
        out = capsys.readouterr().out.splitlines()
        assert code == 0
        assert out == [
            'In stats minecraft:jump:',
            '(1) Bob: 30',
            f'(2) {P3}: 20',
            '(3) Alice: 10',
        ]

    def test_inverse_and_limit(self, server_dir, capsys):
        code = main(['-k', 'jump', '-i', '-l', '2', '-p', str(server_dir)])
        out = capsys.readouterr().out.splitlines()
        assert code == 0
        assert out[1:] == ['(1) Alice: 10', f'(2) {P3}: 20']

    def test_substring_key_sums_matches(self, server_dir, capsys):
        code = main(['-k', 'minecraft:', '-p', str(server_dir)])
        out = capsys.readouterr().out.splitlines()
        assert code == 0
        assert out[1:] == ['(1) Alice: 515', '(2) Bob: 130', f'(3) {P3}: 27']

    def test_player_without_stat_ranked_last(self, server_dir, capsys):
        main(['-k', 'minecraft:zombie', '-p', str(server_dir)])
        out = capsys.readouterr().out.splitlines()
        assert out[1:] == [f'(1) {P3}: 7', '(2) Alice: 4', '(3) Bob: 0']

    def test_show_uuid(self, server_dir, capsys):
        main(['-k', 'jump', '-s', '-p', str(server_dir)])
        out = capsys.readouterr().out
        assert '(1) Bob(22222222-2222-2222-2222-222222222222): 30' in out

    def test_missing_stats_dir_fails_without_report(self, tmp_path, capsys):
        code = main(['-k', 'jump', '-p', str(tmp_path)])
        captured = capsys.readouterr()
        assert code == 1
        assert captured.out == ''

    def test_blank_key_fails(self, server_dir, capsys):
        code = main(['-k', ' ', '-p', str(server_dir)])
        assert code == 1
        assert capsys.readouterr().out == ''

    def test_empty_server(self, tmp_path, capsys):
        (tmp_path / 'world' / 'stats').mkdir(parents=True)
        code = main(['-k', 'jump', '-p', str(tmp_path)])
        assert code == 0
        assert capsys.readouterr().out.strip() == 'Got empty ranking.'

    def test_exports(self, server_dir, tmp_path, capsys):
        csv_path = tmp_path / 'out' / 'rank.csv'
        html_path = tmp_path / 'out' / 'rank.html'
        code = main([
            '-k', 'jump', '-p', str(server_dir),
            '--csv', str(csv_path), '--html', str(html_path),
        ])
        assert code == 0
        assert csv_path.read_text(encoding='utf-8-sig').splitlines()[1] == '1;Bob;22222222-2222-2222-2222-222222222222;30'
        assert 'Alice' in html_path.read_text(encoding='utf-8')

    @pytest.mark.skipif(IS_ROOT, reason='root ignores file permissions')
    def test_unreadable_stats_dir_fails_without_report(self, server_dir, capsys):
        stats_dir = server_dir / 'survival' / 'stats'
        stats_dir.chmod(0)
        try:
            code = main(['-k', 'jump', '-p', str(server_dir)])
        finally:
            stats_dir.chmod(0o755)
        assert code == 1
        assert capsys.readouterr().out == ''

    def test_export_to_directory_fails_cleanly(self, server_dir, tmp_path, capsys, caplog):
        out_dir = tmp_path / 'outdir'
        out_dir.mkdir()
        code = main(['-k', 'jump', '-p', str(server_dir), '--csv', str(out_dir)])
        assert code == 1
        assert capsys.readouterr().out == ''
        assert 'outdir' in caplog.text

    def test_data_version_is_not_a_stat(self, server_dir, capsys):
        stats_dir = server_dir / 'survival' / 'stats'
        (stats_dir / f'{P3}.json').write_text('{"DataVersion": 3465}', encoding='utf-8')
        main(['-k', 'Data', '-p', str(server_dir)])
        out = capsys.readouterr().out.splitlines()
        assert out[1:] == ['(1) Alice: 0', '(2) Bob: 0', f'(3) {P3}: 0']
