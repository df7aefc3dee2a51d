from datetime import datetime, timezone

import pytest

from rpgroster.exceptions import InvalidArgument, NotFound, ValidationFailed
from rpgroster.models import PlayerCandidate, PlayerOrder, PlayerUpdate, Profession, Race
from rpgroster.persistence import PlayerStore
from rpgroster.query import FilterCriteria
from rpgroster.service import PlayerService, check_page_bounds, validate_player_id
from rpgroster.validation import is_valid


def _candidate(name: str = "Abc", **overrides) -> PlayerCandidate:
    data = {
        "name": name,
        "title": "Title",
        "race": Race.HUMAN,
        "profession": Profession.WARRIOR,
        "birthday": datetime(2500, 1, 1, tzinfo=timezone.utc),
        "experience": 100,
    }
    data.update(overrides)
    return PlayerCandidate(**data)


def _seed(service: PlayerService) -> list[int]:
    names = ["Eowyn", "Boromir", "Celeborn", "Denethor", "Arwen"]
    return [
        service.create_player(_candidate(name, experience=100 * (index + 1), level=index)).id
        for index, name in enumerate(names)
    ]


def test_create_then_find_round_trip(service: PlayerService, store: PlayerStore):
    candidate = _candidate()
    assert is_valid(candidate)

    saved = service.create_player(candidate)

    assert saved.id is not None
    found = store.find_by_id(saved.id)
    assert found == saved
    assert found.name == "Abc"
    assert found.banned is False


def test_invalid_create_is_never_persisted(service: PlayerService, store: PlayerStore):
    with pytest.raises(ValidationFailed):
        service.create_player(_candidate(name="x" * 13))
    assert store.count() == 0


def test_list_players_filters_sorts_and_pages(service: PlayerService):
    _seed(service)

    first = service.list_players(FilterCriteria(), PlayerOrder.NAME, 0, 3)
    second = service.list_players(FilterCriteria(), PlayerOrder.NAME, 1, 3)
    assert [p.name for p in first] == ["Arwen", "Boromir", "Celeborn"]
    assert [p.name for p in second] == ["Denethor", "Eowyn"]

    unordered = service.list_players(FilterCriteria(min_experience=200))
    assert [p.name for p in unordered] == ["Boromir", "Celeborn", "Denethor"]


def test_list_players_uses_default_page_size(store: PlayerStore):
    service = PlayerService(store, default_page_size=4)
    _seed(service)

    assert len(service.list_players(FilterCriteria())) == 4


def test_list_players_rejects_negative_paging(service: PlayerService):
    with pytest.raises(InvalidArgument):
        service.list_players(FilterCriteria(), page_number=-1)
    with pytest.raises(InvalidArgument):
        service.list_players(FilterCriteria(), page_size=-3)


def test_count_players(service: PlayerService):
    _seed(service)

    assert service.count_players(FilterCriteria()) == 5
    assert service.count_players(FilterCriteria(max_level=1)) == 2


def test_get_player_checks_id(service: PlayerService):
    with pytest.raises(InvalidArgument):
        service.get_player(0)
    with pytest.raises(NotFound):
        service.get_player(99)


def test_update_applies_partial_merge(service: PlayerService, store: PlayerStore):
    saved = service.create_player(_candidate(level=6))

    updated = service.update_player(saved.id, PlayerUpdate(title="Hero", experience=500))

    assert updated.title == "Hero"
    assert updated.experience == 500
    assert updated.name == saved.name
    assert updated.level == 6
    assert store.find_by_id(saved.id) == updated


def test_rejected_update_leaves_record_untouched(service: PlayerService, store: PlayerStore):
    saved = service.create_player(_candidate())

    with pytest.raises(ValidationFailed):
        service.update_player(saved.id, PlayerUpdate(title="Fine", experience=-1))

    assert store.find_by_id(saved.id) == saved


def test_update_missing_player_is_not_found(service: PlayerService, store: PlayerStore):
    _seed(service)

    with pytest.raises(NotFound):
        service.update_player(404, PlayerUpdate(experience=-1))
    assert store.count() == 5


def test_delete_removes_exactly_one_player(service: PlayerService, store: PlayerStore):
    ids = _seed(service)
    before = {player.id: player for player in store.load_all()}

    service.delete_player(ids[1])

    after = {player.id: player for player in store.load_all()}
    assert ids[1] not in after
    assert after == {key: value for key, value in before.items() if key != ids[1]}

    with pytest.raises(NotFound):
        service.delete_player(ids[1])


def test_deleted_player_cannot_be_updated(service: PlayerService):
    saved = service.create_player(_candidate())
    service.delete_player(saved.id)

    with pytest.raises(NotFound):
        service.update_player(saved.id, PlayerUpdate(name="Back"))


def test_boundary_helpers():
    assert validate_player_id(3) == 3
    with pytest.raises(InvalidArgument):
        validate_player_id(-2)
    check_page_bounds(0, 0)
    check_page_bounds(None, None)
    with pytest.raises(InvalidArgument):
        check_page_bounds(-1, None)
