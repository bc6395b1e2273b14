"""Integration tests for end-to-end workflows."""

import json

import pytest

from liigafpl.base_scorer import GameScorer
from liigafpl.finalize import (
    finalize_game,
    finalize_round,
    find_game_result_paths,
    load_game_events,
    load_player_catalog,
    load_squads,
    save_game_results,
    save_round_totals,
    update_leaderboard,
)
from liigafpl.models import PositionCounts, TeamData
from liigafpl.validators import validate_all_results, validate_player_score, validate_squad

PLAYERS = (
    [{'id': 1, 'name': 'Keeper One', 'position': 'GK', 'teamId': 1, 'value': 5}]
    + [{'id': i, 'name': f'Defender {i}', 'position': 'DEF', 'teamId': 1} for i in range(2, 6)]
    + [{'id': i, 'name': f'Midfielder {i}', 'position': 'MID', 'teamId': 2} for i in range(6, 10)]
    + [{'id': i, 'name': f'Forward {i}', 'position': 'FWD', 'teamId': 2} for i in range(10, 12)]
    + [
        {'id': 12, 'name': 'Keeper Two', 'position': 'GK', 'teamId': 3},
        {'id': 13, 'name': 'Defender 13', 'position': 'DEF', 'teamId': 3},
        {'id': 14, 'name': 'Midfielder 14', 'position': 'MID', 'teamId': 3},
        {'id': 15, 'name': 'Forward 15', 'position': 'FWD', 'teamId': 3},
    ]
)

SQUADS = {
    'joona': {'startingXIIds': list(range(1, 12)), 'benchIds': [12, 13, 14, 15]},
    'Olli': {'startingXIIds': [12, 2, 3, 4, 13, 6, 7, 8, 14, 10, 15], 'benchIds': [1, 5, 9, 11]},
}

GAME_1_EVENTS = {
    'gameId': 1,
    'eventsById': {
        **{str(i): {'minutes': '60+'} for i in range(1, 12)},
        '2': {'minutes': '0'},
        '10': {'minutes': '60+', 'goals': 2},
        '13': {'minutes': '60+', 'cleanSheet': True},
        'bad-id': {'minutes': '60+'},
    },
}

GAME_2_EVENTS = {
    'gameId': 2,
    'eventsById': {str(i): {'minutes': '1_59'} for i in range(1, 16)},
}


@pytest.fixture
def temp_data_dir(tmp_path):
    """Create temporary data directory with test files."""
    data_dir = tmp_path / 'data'
    games_dir = data_dir / 'games'
    games_dir.mkdir(parents=True)

    (data_dir / 'players.json').write_text(json.dumps({'players': PLAYERS}, indent=2))
    (data_dir / 'squads.json').write_text(json.dumps({'squads': SQUADS}, indent=2))
    (games_dir / 'game_1_events.json').write_text(json.dumps(GAME_1_EVENTS, indent=2))
    (games_dir / 'game_2_events.json').write_text(json.dumps(GAME_2_EVENTS, indent=2))

    return data_dir


class TestLoading:
    """Tests for reading data files."""

    def test_load_player_catalog(self, temp_data_dir):
        """Test catalog loads as PlayerLite keyed by id."""
        catalog = load_player_catalog(temp_data_dir / 'players.json')
        assert len(catalog) == 15
        assert catalog[1].position == 'GK'
        assert catalog[14].position == 'MID'

    def test_load_squads(self, temp_data_dir):
        """Test squads load as TeamData."""
        squads = load_squads(temp_data_dir / 'squads.json')
        assert squads['joona'] == TeamData(list(range(1, 12)), [12, 13, 14, 15])

    def test_load_squads_for_managers(self, temp_data_dir):
        """Test manager filter matches case-insensitively and fills in empty squads."""
        squads = load_squads(temp_data_dir / 'squads.json', managers=['olli', 'otto'])
        assert list(squads) == ['olli', 'otto']
        assert squads['olli'].bench_ids == [1, 5, 9, 11]
        assert squads['otto'] == TeamData()

    def test_load_game_events(self, temp_data_dir):
        """Test events are normalized and invalid ids dropped."""
        events = load_game_events(temp_data_dir / 'games' / 'game_1_events.json', 1)
        assert set(events) == set(range(1, 12)) | {13}
        assert events[2].minutes == '0'
        assert events[13].clean_sheet is True

    def test_events_file_without_events(self, temp_data_dir):
        """Test a file with no events object means nobody played."""
        path = temp_data_dir / 'games' / 'game_5_events.json'
        path.write_text(json.dumps({'gameId': 5}))
        assert load_game_events(path, 5) == {}

    def test_missing_file(self, temp_data_dir):
        """Test missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_player_catalog(temp_data_dir / 'nope.json')

    def test_invalid_squads_file(self, temp_data_dir):
        """Test schema failures surface as ValueError."""
        bad = temp_data_dir / 'bad_squads.json'
        bad.write_text(json.dumps({'squads': {'x': {'startingXIIds': [1, 1]}}}))
        with pytest.raises(ValueError, match='Schema validation failed'):
            load_squads(bad)


class TestFinalizeGame:
    """Tests for scoring and saving a game."""

    def test_finalize_game(self, temp_data_dir):
        """Test both squads are scored with autosubs."""
        players = load_player_catalog(temp_data_dir / 'players.json')
        squads = load_squads(temp_data_dir / 'squads.json')
        events = load_game_events(temp_data_dir / 'games' / 'game_1_events.json', 1)

        results = finalize_game(1, squads, players, events, verbose=False)

        # joona: 10 starters at 2 pts, FWD 10 adds 8 for goals, DEF 13 on for 2 with 6 pts
        assert results['joona'].total == 20 + 8 + 6
        assert results['joona'].subs_used == [13]
        assert results['joona'].subs_out == [2]

        # Olli: GK 12 did not play so bench GK 1 comes on; 2, 14 and 15 did not play
        # and bench 5, 9, 11 replace them in bench order
        olli = results['Olli']
        assert olli.subs_used == [1, 5, 9, 11]
        assert olli.subs_out == [12, 2, 14, 15]
        assert olli.counts == PositionCounts(GK=1, DEF=4, MID=4, FWD=2)
        assert olli.total == 34
        errors, _ = validate_all_results(results)
        assert errors == []

    def test_save_game_results(self, temp_data_dir):
        """Test the result file holds points, subs and ranks."""
        players = load_player_catalog(temp_data_dir / 'players.json')
        squads = load_squads(temp_data_dir / 'squads.json')
        events = load_game_events(temp_data_dir / 'games' / 'game_1_events.json', 1)
        results = finalize_game(1, squads, players, events, verbose=False)

        output = temp_data_dir / 'results' / 'game_1.json'
        save_game_results(output, 1, results)

        data = json.loads(output.read_text())
        assert data['game_id'] == 1
        rows = {row['manager']: row for row in data['results']}
        assert rows['joona']['points'] == 34
        assert rows['joona']['subsUsed'] == [13]
        assert rows['joona']['counts'] == {'GK': 1, 'DEF': 4, 'MID': 4, 'FWD': 2}
        assert sorted(row['rank'] for row in data['results']) == [1, 2]

    def test_game_scorer_player_scores_validate(self, temp_data_dir):
        """Test individual player scores are internally consistent."""
        players = load_player_catalog(temp_data_dir / 'players.json')
        events = load_game_events(temp_data_dir / 'games' / 'game_1_events.json', 1)
        scorer = GameScorer(1, players, events)

        forward = scorer.score_player(10)
        assert forward.total_points == 10
        assert forward.played
        assert validate_player_score(forward) == []

        benched = scorer.score_player(15)
        assert not benched.found_in_events
        assert benched.total_points == 0

        assert scorer.score_player(404).position == 'UNKNOWN'

    def test_squads_validate(self, temp_data_dir):
        """Test the sample squads are legal."""
        players = load_player_catalog(temp_data_dir / 'players.json')
        for manager, team in load_squads(temp_data_dir / 'squads.json').items():
            assert validate_squad(manager, team, players) == []


class TestRoundsAndLeaderboard:
    """Tests for reducing finalized games."""

    @pytest.fixture
    def finalized_dir(self, temp_data_dir):
        """Finalize games 1 and 2 into data/results."""
        players = load_player_catalog(temp_data_dir / 'players.json')
        squads = load_squads(temp_data_dir / 'squads.json')
        results_dir = temp_data_dir / 'results'
        for game_id in (1, 2):
            events = load_game_events(
                temp_data_dir / 'games' / f'game_{game_id}_events.json', game_id
            )
            results = finalize_game(game_id, squads, players, events, verbose=False)
            save_game_results(results_dir / f'game_{game_id}.json', game_id, results)
        return results_dir

    def test_find_game_result_paths(self, finalized_dir):
        """Test result files are listed in game order, ignoring other files."""
        (finalized_dir / 'game_10.json').write_text(json.dumps({'results': []}))
        (finalized_dir / 'leaderboard.json').write_text('{}')
        names = [p.name for p in find_game_result_paths(finalized_dir)]
        assert names == ['game_1.json', 'game_2.json', 'game_10.json']

    def test_finalize_round(self, finalized_dir):
        """Test round totals sum each game and skip missing ones."""
        paths = [finalized_dir / f'game_{g}.json' for g in (1, 2, 3)]
        totals = finalize_round(1, paths)

        # game 2: everyone plays 1-59 minutes, 11 pts per squad
        assert totals['joona'] == 34 + 11

        output = finalized_dir / 'round_1.json'
        save_round_totals(output, 1, totals, [1, 2, 3])
        data = json.loads(output.read_text())
        assert data['round'] == 1
        assert {'manager': 'joona', 'points': 45} in data['results']

    def test_update_leaderboard(self, finalized_dir):
        """Test the leaderboard sums all games and ranks by total."""
        leaderboard_path = finalized_dir / 'leaderboard.json'
        rows = update_leaderboard(leaderboard_path, find_game_result_paths(finalized_dir))

        assert [row['rank'] for row in rows] == [1, 2]
        assert rows[0]['total'] >= rows[1]['total']
        assert all(row['games'] == 2 for row in rows)

        data = json.loads(leaderboard_path.read_text())
        assert data['games_finalized'] == 2
        assert data['rows'] == rows


class TestConfigIntegration:
    """Test configuration shipped in data/league_config.json."""

    def test_config_loaded(self):
        """Test the league config loads and validates."""
        from liigafpl.config import clear_config_cache, get_current_season, get_managers

        clear_config_cache()
        assert get_current_season() == 2026
        assert get_managers() == ['admin', 'joona', 'olli', 'otto']

    def test_round_games(self):
        """Test configured rounds resolve to game ids."""
        from liigafpl.config import get_round_games

        assert get_round_games(1) == [1, 2, 3, 4, 5, 6]
        assert get_round_games(99) == []


class TestCli:
    """Test the autoscorer command line."""

    def test_finalize_game_and_leaderboard(self, temp_data_dir, monkeypatch, capsys):
        """Test --game with --update-leaderboard writes both files."""
        import autoscorer

        monkeypatch.setattr(
            'sys.argv',
            ['autoscorer.py', '--game', '1', '--data-dir', str(temp_data_dir),
             '--update-leaderboard', '--quiet'],
        )
        autoscorer.main()

        results_dir = temp_data_dir / 'results'
        game = json.loads((results_dir / 'game_1.json').read_text())
        managers = [row['manager'] for row in game['results']]
        assert managers == ['admin', 'joona', 'olli', 'otto']

        rows = {row['manager']: row for row in game['results']}
        assert rows['joona']['points'] == 34
        assert rows['admin']['points'] == 0

        assert (results_dir / 'leaderboard.json').exists()
        assert 'GAME 1 RESULTS' in capsys.readouterr().out

    def test_missing_events_exits(self, temp_data_dir, monkeypatch):
        """Test a game without an events file exits with an error."""
        import autoscorer

        monkeypatch.setattr(
            'sys.argv', ['autoscorer.py', '--game', '9', '--data-dir', str(temp_data_dir), '-q']
        )
        with pytest.raises(SystemExit) as exc:
            autoscorer.main()
        assert exc.value.code == 1

    def test_log_file_records_substitutions(self, temp_data_dir, tmp_path, monkeypatch):
        """Test --log-dir writes a per-game log with the substitution decisions."""
        import autoscorer

        log_dir = tmp_path / 'logs'
        monkeypatch.setattr(
            'sys.argv',
            ['autoscorer.py', '--game', '1', '--data-dir', str(temp_data_dir),
             '--log-dir', str(log_dir), '-q'],
        )
        autoscorer.main()

        log_files = list(log_dir.glob('game_1_*.log'))
        assert len(log_files) == 1
        assert 'Bench DEF 13 replaces DEF 2' in log_files[0].read_text()
