import pytest

from ludoteca.core.exceptions import ConflictError, NotFoundError, ValidationError
from ludoteca.services import CategoryService, EditorService, UserService, VideoGameService


async def test_list_uses_kind_cache_key_and_tag(db, cache):
    service = CategoryService(db, cache)
    await service.create({"name": "Action"})

    assert await service.list(1, 10) == [{"id": 1, "name": "Action"}]
    assert await cache.get("categories_1_10") == [{"id": 1, "name": "Action"}]
    assert await cache.invalidate_by_tag("categoriesCache") == 1


async def test_cached_list_is_served_without_database(db, cache):
    service = EditorService(db, cache)
    await service.create({"name": "Capcom", "country": "JP"})
    first = await service.list()

    async def fail(*args, **kwargs):
        raise AssertionError("não deveria consultar o banco")

    service.repository.find_by = fail
    assert await service.list() == first


async def test_each_mutation_invalidates_the_kind_tag(db, cache):
    service = CategoryService(db, cache)

    await service.list()
    created = await service.create({"name": "Puzzle"})
    assert await cache.get("categories_1_10") is None

    await service.list()
    await service.update(created["id"], {"name": "Quebra-cabeça"})
    assert await cache.get("categories_1_10") is None

    assert await service.list() == [{"id": created["id"], "name": "Quebra-cabeça"}]
    await service.delete(created["id"])
    assert await service.list() == []


async def test_failed_create_does_not_invalidate(db, cache):
    service = CategoryService(db, cache)
    await service.list()

    with pytest.raises(ValidationError):
        await service.create({"name": ""})

    assert await cache.get("categories_1_10") == []


async def test_get_missing_record(db, cache):
    with pytest.raises(NotFoundError) as exc:
        await CategoryService(db, cache).get(1)
    assert exc.value.status_code == 404


async def test_update_missing_record(db, cache):
    with pytest.raises(NotFoundError):
        await EditorService(db, cache).update(1, {"name": "X"})


async def test_failed_update_rolls_back(db, cache):
    service = EditorService(db, cache)
    created = await service.create({"name": "Atari", "country": "US"})

    with pytest.raises(ValidationError):
        await service.update(created["id"], {"name": "", "country": "FR"})

    assert await service.get(created["id"]) == created


async def test_video_game_flow(db, cache):
    category = await CategoryService(db, cache).create({"name": "Corrida"})
    editor = await EditorService(db, cache).create({"name": "Nintendo", "country": "JP"})
    service = VideoGameService(db, cache)

    game = await service.create({
        "title": "Mario Kart 8",
        "releaseDate": "2014-05-29",
        "description": "Corrida",
        "category": category["id"],
        "editor": {"id": editor["id"]},
    })

    assert game["category"] == category
    assert game["editor"] == editor
    assert await service.list() == [game]

    with pytest.raises(ConflictError):
        await CategoryService(db, cache).delete(category["id"])


async def test_video_game_with_null_reference(db, cache):
    with pytest.raises(ValidationError) as exc:
        await VideoGameService(db, cache).create({
            "title": "Sem editora",
            "releaseDate": "2020-01-01",
            "description": "x",
            "category": None,
            "editor": None,
        })
    assert {v.field for v in exc.value.violations} == {"category", "editor"}


async def test_user_service_is_not_cached(db, cache):
    service = UserService(db, cache)
    assert not service.uses_cache

    await service.create({"email": "a@ludoteca.com", "password": "x"})
    await service.list()
    assert len(cache.provider) == 0


async def test_user_service_get_by_email(db):
    service = UserService(db)
    created = await service.create({"email": "b@ludoteca.com", "password": "x"})

    user = await service.get_by_email("  b@ludoteca.com ")
    assert user.id == created["id"]
    assert await service.get_by_email("c@ludoteca.com") is None
