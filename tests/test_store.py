"""Tests for FamilyStore: people, relationships, media, invites, profiles, audit."""

from datetime import date

import pytest

from family_directory.core.store import default_display_name, generate_invite_code
from family_directory.errors import NotFoundError
from family_directory.models.audit_log import AuditLog
from family_directory.models.media import Media
from family_directory.models.person import Person
from family_directory.models.relationship import Relationship


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def author(make_user):
    return make_user("author@example.com")


@pytest.fixture
def family(store, author):
    """Three people: two living, one deceased with a maiden name."""
    ada = store.create_person(
        {"full_name": "Ada Falohun", "is_living": True, "tags": ["Lagos"]},
        actor_id=author.id,
    )
    bisi = store.create_person(
        {
            "full_name": "Bisi Adeyemi",
            "maiden_name": "Falohun",
            "is_living": False,
            "death_date": date(1999, 5, 1),
            "tags": ["Ijebu", "Lagos"],
        },
        actor_id=author.id,
    )
    chidi = store.create_person(
        {"full_name": "Chidi Okafor", "is_living": True, "tags": []},
        actor_id=author.id,
    )
    return ada, bisi, chidi


# =============================================================================
# People
# =============================================================================


def test_create_person_materializes_row(store, author):
    person = store.create_person({"full_name": "Ada"}, actor_id=author.id)

    assert person.id is not None
    assert person.created_by_user_id == author.id
    assert person.is_living is True
    assert person.tags == []
    assert person.created_at is not None
    assert person.updated_at is not None


def test_create_person_with_unknown_linked_user_fails(store, author):
    with pytest.raises(NotFoundError) as excinfo:
        store.create_person({"full_name": "Ada", "linked_user_id": 999}, actor_id=author.id)

    assert excinfo.value.field == "linked_user_id"


def test_get_person_unknown_id(store):
    with pytest.raises(NotFoundError):
        store.get_person(12345)


def test_list_people_without_filters_returns_all_in_insertion_order(store, family):
    assert [p.full_name for p in store.list_people()] == [
        "Ada Falohun",
        "Bisi Adeyemi",
        "Chidi Okafor",
    ]


def test_list_people_living_filter(store, family):
    living = store.list_people(living=True)
    dead = store.list_people(living=False)

    assert living and all(p.is_living for p in living)
    assert [p.full_name for p in dead] == ["Bisi Adeyemi"]


def test_list_people_search_matches_full_or_maiden_name(store, family):
    names = [p.full_name for p in store.list_people(search="falohun")]

    # Ada by full name, Bisi by maiden name; case-insensitive
    assert names == ["Ada Falohun", "Bisi Adeyemi"]


def test_list_people_search_treats_wildcard_characters_literally(store, author):
    store.create_person({"full_name": "Ada Lovelace"}, actor_id=author.id)
    store.create_person({"full_name": "Grace 100% Hopper"}, actor_id=author.id)

    assert store.list_people(search="_") == []
    assert store.list_people(search="\\") == []
    assert [p.full_name for p in store.list_people(search="%")] == ["Grace 100% Hopper"]


def test_list_people_search_folds_non_ascii_case(store, author):
    store.create_person({"full_name": "Émile Ọlá"}, actor_id=author.id)
    store.create_person({"full_name": "Tunde Ọlá", "maiden_name": "ÀDÉ"}, actor_id=author.id)

    assert [p.full_name for p in store.list_people(search="émile")] == ["Émile Ọlá"]
    assert [p.full_name for p in store.list_people(search="ọlá")] == ["Émile Ọlá", "Tunde Ọlá"]
    assert [p.full_name for p in store.list_people(search="àdé")] == ["Tunde Ọlá"]


def test_list_people_combined_filters(store, family):
    names = [p.full_name for p in store.list_people(search="Falohun", living=True)]
    assert names == ["Ada Falohun"]


def test_list_people_tag_containment(store, family):
    assert [p.full_name for p in store.list_people(tag="Lagos")] == [
        "Ada Falohun",
        "Bisi Adeyemi",
    ]
    assert [p.full_name for p in store.list_people(tag="Ijebu")] == ["Bisi Adeyemi"]
    assert store.list_people(tag="Lago") == []


def test_update_person_patches_only_given_fields(store, family, author):
    ada = family[0]
    before = ada.updated_at

    updated = store.update_person(ada.id, {"nickname": "Dada"}, actor_id=author.id)

    assert updated.nickname == "Dada"
    assert updated.full_name == "Ada Falohun"
    assert updated.tags == ["Lagos"]
    assert updated.updated_at >= before


def test_update_unknown_person(store, author):
    with pytest.raises(NotFoundError):
        store.update_person(404, {"nickname": "x"}, actor_id=author.id)


def test_get_person_detail_assembles_media_and_both_edge_directions(store, family, author):
    ada, bisi, chidi = family
    store.create_relationship(
        {"from_person_id": bisi.id, "to_person_id": ada.id, "type": "PARENT"},
        actor_id=author.id,
    )
    store.create_relationship(
        {"from_person_id": ada.id, "to_person_id": chidi.id, "type": "SPOUSE"},
        actor_id=author.id,
    )
    store.create_media(
        {"person_id": ada.id, "type": "PHOTO", "url": "https://img/ada.jpg"},
        actor_id=author.id,
    )

    detail = store.get_person_detail(ada.id)

    assert detail["person"].id == ada.id
    assert [m.url for m in detail["media"]] == ["https://img/ada.jpg"]
    assert [r.type for r in detail["relationships_from"]] == ["SPOUSE"]
    assert [r.type for r in detail["relationships_to"]] == ["PARENT"]


# =============================================================================
# Delete policy: cascade
# =============================================================================


def test_delete_person_cascades_to_media_and_relationships(store, db, family, author):
    ada, bisi, chidi = family
    store.create_relationship(
        {"from_person_id": bisi.id, "to_person_id": ada.id, "type": "PARENT"},
        actor_id=author.id,
    )
    store.create_relationship(
        {"from_person_id": ada.id, "to_person_id": chidi.id, "type": "SIBLING"},
        actor_id=author.id,
    )
    kept = store.create_relationship(
        {"from_person_id": bisi.id, "to_person_id": chidi.id, "type": "PARENT"},
        actor_id=author.id,
    )
    store.create_media(
        {"person_id": ada.id, "type": "VIDEO", "url": "https://vid/ada.mp4"},
        actor_id=author.id,
    )

    assert store.delete_person(ada.id, actor_id=author.id) is True

    assert db.get(Person, ada.id) is None
    assert db.query(Media).filter(Media.person_id == ada.id).count() == 0
    remaining = db.query(Relationship).all()
    assert [r.id for r in remaining] == [kept.id]


def test_delete_person_is_idempotent(store, family, author):
    ada = family[0]

    assert store.delete_person(ada.id, actor_id=author.id) is True
    assert store.delete_person(ada.id, actor_id=author.id) is False


# =============================================================================
# Relationships
# =============================================================================


@pytest.mark.parametrize("missing", ["from_person_id", "to_person_id"])
def test_create_relationship_with_missing_endpoint(store, family, author, missing):
    ada, bisi, _ = family
    data = {"from_person_id": ada.id, "to_person_id": bisi.id, "type": "SIBLING"}
    data[missing] = 9999

    with pytest.raises(NotFoundError) as excinfo:
        store.create_relationship(data, actor_id=author.id)

    assert excinfo.value.field == missing


def test_relationship_visible_from_both_endpoints(store, family, author):
    ada, bisi, _ = family
    rel = store.create_relationship(
        {"from_person_id": bisi.id, "to_person_id": ada.id, "type": "PARENT"},
        actor_id=author.id,
    )

    assert [r.id for r in store.get_relationships_for_person(bisi.id)["from"]] == [rel.id]
    assert [r.id for r in store.get_relationships_for_person(ada.id)["to"]] == [rel.id]
    assert store.get_relationships_for_person(ada.id)["from"] == []


def test_relationship_has_no_implicit_inverse(store, db, family, author):
    ada, bisi, _ = family
    store.create_relationship(
        {"from_person_id": bisi.id, "to_person_id": ada.id, "type": "PARENT"},
        actor_id=author.id,
    )

    assert db.query(Relationship).count() == 1


def test_delete_relationship(store, family, author):
    ada, bisi, _ = family
    rel = store.create_relationship(
        {"from_person_id": ada.id, "to_person_id": bisi.id, "type": "SIBLING"},
        actor_id=author.id,
    )

    assert store.delete_relationship(rel.id, actor_id=author.id) is True
    assert store.delete_relationship(rel.id, actor_id=author.id) is False


# =============================================================================
# Media
# =============================================================================


def test_create_media_for_unknown_person(store, author):
    with pytest.raises(NotFoundError) as excinfo:
        store.create_media(
            {"person_id": 77, "type": "PHOTO", "url": "https://img/x.jpg"},
            actor_id=author.id,
        )

    assert excinfo.value.field == "person_id"


def test_create_and_delete_media(store, family, author):
    ada = family[0]
    item = store.create_media(
        {"person_id": ada.id, "type": "PHOTO", "url": "https://img/a.jpg", "caption": "1970"},
        actor_id=author.id,
    )

    assert item.uploader_user_id == author.id
    assert [m.id for m in store.get_media_for_person(ada.id)] == [item.id]

    assert store.delete_media(item.id, actor_id=author.id) is True
    assert store.get_media_for_person(ada.id) == []
    assert store.delete_media(item.id, actor_id=author.id) is False


# =============================================================================
# Invites
# =============================================================================


def test_generate_invite_code_shape():
    code = generate_invite_code()
    assert len(code) == 8
    assert code.isalnum() and code.upper() == code


def test_create_invite_retries_on_code_collision(store, admin, monkeypatch):
    first = store.create_invite("one@example.com", admin.id)

    codes = iter([first.code, "UNIQUE42"])
    monkeypatch.setattr(
        "family_directory.core.store.generate_invite_code", lambda: next(codes)
    )

    second = store.create_invite("two@example.com", admin.id)
    assert second.code == "UNIQUE42"


def test_list_invites_newest_first(store, admin):
    first = store.create_invite("one@example.com", admin.id)
    second = store.create_invite("two@example.com", admin.id)

    assert [i.id for i in store.list_invites()] == [second.id, first.id]


# =============================================================================
# Profiles
# =============================================================================


def test_default_display_name():
    assert default_display_name("ada@example.com") == "ada"
    assert default_display_name("ada") == "ada"


def test_upsert_profile_updates_only_given_fields(store, author):
    profile = store.upsert_profile(author.id, {"bio": "Keeper of the archive"})

    assert profile.bio == "Keeper of the archive"
    assert profile.display_name == "author"

    profile = store.upsert_profile(author.id, {"privacy_show_social": False})
    assert profile.bio == "Keeper of the archive"
    assert profile.privacy_show_social is False


def test_upsert_profile_creates_missing_profile(store, db):
    user = store.add_user("solo@example.com", "x")
    db.commit()

    profile = store.upsert_profile(user.id, {"location": "Ibadan"})

    assert profile.display_name == "solo"
    assert profile.location == "Ibadan"


def test_upsert_profile_unknown_user(store):
    with pytest.raises(NotFoundError):
        store.upsert_profile(999, {"bio": "?"})


# =============================================================================
# Audit trail
# =============================================================================


def test_writes_are_audited(store, db, family, author):
    ada = family[0]
    store.update_person(ada.id, {"birth_date": date(1950, 1, 2)}, actor_id=author.id)
    store.delete_person(ada.id, actor_id=author.id)

    actions = [
        (log.action, log.details)
        for log in store.list_audit_logs(entity_type="person", entity_id=ada.id)
    ]

    assert [a for a, _ in actions] == ["DELETE", "UPDATE", "CREATE"]
    assert actions[1][1] == {"birth_date": "1950-01-02"}
    assert db.query(AuditLog).filter(AuditLog.actor_user_id == author.id).count() >= 5
