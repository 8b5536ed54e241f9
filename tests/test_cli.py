"""
End-to-end tests for the costoflife command line.
"""

import json

import pytest

from costoflife._version import VERSION
from costoflife.cli import main


@pytest.fixture
def workspace(tmp_path, monkeypatch, capsys):
    """An initialized expense directory; returns its config path."""
    monkeypatch.delenv('COSTOFLIFE_CONFIG', raising=False)
    monkeypatch.delenv('COSTOFLIFE_LOG_LEVEL', raising=False)
    monkeypatch.chdir(tmp_path)
    main(['init', 'expenses'])
    capsys.readouterr()
    return str(tmp_path / 'expenses' / 'config')


def add(config, *expression):
    main(['add', '-y', '--config', config, *expression])


class TestInit:
    """Tests for 'costoflife init'."""

    def test_creates_files(self, tmp_path, monkeypatch, capsys):
        """Test the starter layout."""
        monkeypatch.chdir(tmp_path)
        main(['init', 'expenses'])

        assert (tmp_path / 'expenses' / 'config' / 'settings.yaml').exists()
        assert (tmp_path / 'expenses' / 'data').is_dir()
        assert (tmp_path / 'expenses' / '.gitignore').exists()
        out = capsys.readouterr().out
        assert 'config/settings.yaml' in out
        assert 'costoflife add' in out

    def test_existing_files_are_kept(self, tmp_path, monkeypatch, capsys):
        """Test that a second init does not overwrite settings."""
        monkeypatch.chdir(tmp_path)
        main(['init', 'expenses'])
        settings = tmp_path / 'expenses' / 'config' / 'settings.yaml'
        settings.write_text('currency_symbol: "$"\n', encoding='utf-8')
        capsys.readouterr()

        main(['init', 'expenses'])

        assert settings.read_text(encoding='utf-8') == 'currency_symbol: "$"\n'
        assert '(exists)' in capsys.readouterr().out


class TestAdd:
    """Tests for 'costoflife add'."""

    def test_add_and_report(self, workspace, capsys):
        """Test recording an expense then reading the daily cost."""
        add(workspace, 'Netflix', '120€', '1m12x', '010121', '#tv')
        assert 'done!' in capsys.readouterr().out

        main(['summary', '--config', workspace, '--on', '2021-06-01', '--format', 'json'])
        data = json.loads(capsys.readouterr().out)

        assert data['on'] == '2021-06-01'
        assert data['cost_of_life'] == '0.33'
        assert len(data['transactions']) == 1
        assert data['transactions'][0]['title'] == 'Netflix'
        assert data['transactions'][0]['ends_on'] == '2021-12-31'

    def test_add_duplicate(self, workspace, capsys):
        """Test that the same expense is only stored once."""
        add(workspace, 'Coffee', '2€', '010121')
        add(workspace, '2.00€', 'Coffee', '010121')
        assert 'Already recorded: Coffee' in capsys.readouterr().out

    def test_add_json(self, workspace, capsys):
        """Test JSON output of add."""
        main(['add', '--config', workspace, '--format', 'json', 'Car', '20000€', '5y', '150320', '.transport'])
        data = json.loads(capsys.readouterr().out)
        assert data['added'] is True
        assert data['lifetime'] == '5y1x'
        assert data['tags'] == ['transport']

    def test_missing_amount(self, workspace, capsys):
        """Test that an expression without amount is rejected."""
        with pytest.raises(SystemExit) as exc:
            add(workspace, 'lunch')
        assert exc.value.code == 1
        assert 'missing amount' in capsys.readouterr().err

    def test_invalid_date(self, workspace, capsys):
        """Test that an impossible date is rejected."""
        with pytest.raises(SystemExit) as exc:
            add(workspace, 'lunch', '10€', '310221')
        assert exc.value.code == 1
        assert '310221' in capsys.readouterr().err

    def test_empty_expression(self, workspace, capsys):
        """Test that add without an expression shows help."""
        with pytest.raises(SystemExit) as exc:
            add(workspace)
        assert exc.value.code == 1
        assert 'amount (required)' in capsys.readouterr().err

    def test_declined_confirmation(self, workspace, tmp_path, monkeypatch, capsys):
        """Test that answering no leaves the ledger untouched."""
        monkeypatch.setattr('builtins.input', lambda prompt='': 'n')
        main(['add', '--config', workspace, 'Gym', '30€', '1m', '010221'])

        out = capsys.readouterr().out
        assert 'Per Diem' in out
        assert 'ok, another time' in out
        assert not (tmp_path / 'expenses' / 'data' / 'ledger.yaml').exists()

    def test_accepted_confirmation(self, workspace, tmp_path, monkeypatch, capsys):
        """Test that an empty answer defaults to yes."""
        monkeypatch.setattr('builtins.input', lambda prompt='': '')
        main(['add', '--config', workspace, 'Gym', '30€', '1m', '010221'])

        assert 'done!' in capsys.readouterr().out
        assert (tmp_path / 'expenses' / 'data' / 'ledger.yaml').exists()


class TestReports:
    """Tests for 'summary', 'tags' and 'search'."""

    @pytest.fixture
    def ledger(self, workspace, capsys):
        add(workspace, 'Netflix', '120€', '1m12x', '010121', '#tv')
        add(workspace, 'Lunch', '10€', '010621', '#food')
        add(workspace, 'Dinner', '30€', '010621', '#food', '#friends')
        capsys.readouterr()
        return workspace

    def test_summary_text(self, ledger, capsys):
        """Test the text summary."""
        main(['summary', '--config', ledger, '--on', '010621'])
        out = capsys.readouterr().out
        assert 'Cost of life on 2021-06-01' in out
        assert 'Daily cost of life: 40.33€' in out

    def test_summary_nothing_active(self, ledger, capsys):
        """Test a day before every expense."""
        main(['summary', '--config', ledger, '--on', '2020-01-01'])
        assert 'No active expenses.' in capsys.readouterr().out

    def test_tags_json(self, ledger, capsys):
        """Test the tag breakdown."""
        main(['tags', '--config', ledger, '--on', '2021-06-01', '--format', 'json'])
        data = json.loads(capsys.readouterr().out)
        assert [row['tag'] for row in data['tags']] == ['food', 'friends', 'tv']
        assert data['tags'][0]['per_diem'] == '40.00'
        assert data['tags'][0]['count'] == 2

    def test_search(self, ledger, capsys):
        """Test finding expenses by tag."""
        main(['search', '--config', ledger, '--on', '2021-06-01', '--format', 'json', '#food'])
        data = json.loads(capsys.readouterr().out)
        assert [m['title'] for m in data['matches']] == ['Dinner', 'Lunch']

    def test_search_no_match(self, ledger, capsys):
        """Test a search without results."""
        main(['search', '--config', ledger, 'holidays'])
        assert 'No matches found.' in capsys.readouterr().out

    def test_search_reports_config_warnings(self, ledger, tmp_path, capsys):
        """Test that unknown settings are reported by search too."""
        settings = tmp_path / 'expenses' / 'config' / 'settings.yaml'
        settings.write_text(settings.read_text(encoding='utf-8') + 'colour: blue\n', encoding='utf-8')
        main(['search', '--config', ledger, 'netflix'])
        captured = capsys.readouterr()
        assert 'Netflix' in captured.out
        assert "Unknown setting 'colour'" in captured.err

    def test_invalid_on_date(self, ledger, capsys):
        """Test that an unreadable --on date exits."""
        with pytest.raises(SystemExit) as exc:
            main(['summary', '--config', ledger, '--on', 'tomorrow'])
        assert exc.value.code == 1
        assert 'Invalid date' in capsys.readouterr().err

    def test_config_from_environment(self, ledger, monkeypatch, capsys):
        """Test that COSTOFLIFE_CONFIG locates the config directory."""
        monkeypatch.setenv('COSTOFLIFE_CONFIG', ledger)
        main(['summary', '--on', '2021-06-01', '--format', 'json'])
        assert json.loads(capsys.readouterr().out)['cost_of_life'] == '40.33'


class TestMisc:
    """Tests for version, help and config errors."""

    def test_version(self, capsys):
        """Test the version command."""
        main(['version'])
        assert capsys.readouterr().out.strip() == f'costoflife {VERSION}'

    def test_no_command_prints_help(self, capsys):
        """Test running without a command."""
        with pytest.raises(SystemExit) as exc:
            main([])
        assert exc.value.code == 0
        assert 'commands' in capsys.readouterr().out

    def test_missing_config_dir(self, tmp_path, monkeypatch, capsys):
        """Test that reports need a config directory."""
        monkeypatch.delenv('COSTOFLIFE_CONFIG', raising=False)
        monkeypatch.chdir(tmp_path)
        with pytest.raises(SystemExit) as exc:
            main(['summary'])
        assert exc.value.code == 1
        assert 'Config directory not found' in capsys.readouterr().err

    def test_malformed_ledger(self, workspace, tmp_path, capsys):
        """Test that a broken ledger file is reported."""
        (tmp_path / 'expenses' / 'data' / 'ledger.yaml').write_text('transactions: [', encoding='utf-8')
        with pytest.raises(SystemExit) as exc:
            main(['summary', '--config', workspace])
        assert exc.value.code == 1
        assert 'Error loading ledger' in capsys.readouterr().err
