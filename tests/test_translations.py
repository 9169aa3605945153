"""
Tests for translation CRUD endpoints.
"""

from faker import Faker
from translations_api import db
from translations_api.models import Translation

fake = Faker()


class TestCreateTranslation:
    """Tests for POST /api/translations"""

    def test_create_without_tags(self, client, auth_headers, en_locale):
        response = client.post('/api/translations', json={
            'locale_id': en_locale['id'],
            'key': 'welcome.message',
            'value': 'Welcome to our app!'
        }, headers=auth_headers)

        assert response.status_code == 201
        assert response.json['locale_id'] == en_locale['id']
        assert response.json['key'] == 'welcome.message'
        assert response.json['value'] == 'Welcome to our app!'
        assert response.json['tags'] == []
        assert response.json['locale']['code'] == 'en'

    def test_create_with_tags(self, client, auth_headers, en_locale, tags):
        response = client.post('/api/translations', json={
            'locale_id': en_locale['id'],
            'key': 'greeting.title',
            'value': 'Hello there!',
            'tags': [tags['mobile'], tags['web']]
        }, headers=auth_headers)

        assert response.status_code == 201
        assert sorted(t['name'] for t in response.json['tags']) == ['mobile', 'web']

    def test_create_requires_locale_key_and_value(self, client, auth_headers, en_locale):
        response = client.post('/api/translations', json={
            'key': 'missing.locale', 'value': 'Missing Locale'
        }, headers=auth_headers)
        assert response.status_code == 422
        assert 'locale_id' in response.json['errors']

        response = client.post('/api/translations', json={
            'locale_id': en_locale['id'], 'value': 'Missing Key'
        }, headers=auth_headers)
        assert response.status_code == 422
        assert 'key' in response.json['errors']

        response = client.post('/api/translations', json={
            'locale_id': en_locale['id'], 'key': 'missing.value'
        }, headers=auth_headers)
        assert response.status_code == 422
        assert 'value' in response.json['errors']

    def test_create_rejects_unknown_locale(self, client, auth_headers, db_session):
        response = client.post('/api/translations', json={
            'locale_id': 999, 'key': 'a', 'value': 'b'
        }, headers=auth_headers)

        assert response.status_code == 422
        assert 'locale_id' in response.json['errors']

    def test_create_rejects_unknown_tag(self, client, auth_headers, en_locale, tags):
        response = client.post('/api/translations', json={
            'locale_id': en_locale['id'], 'key': 'a', 'value': 'b',
            'tags': [tags['mobile'], 999]
        }, headers=auth_headers)

        assert response.status_code == 422
        assert 'tags' in response.json['errors']

        with client.application.app_context():
            assert Translation.query.count() == 0

    def test_create_rejects_out_of_range_ids(self, client, auth_headers, en_locale, tags):
        response = client.post('/api/translations', json={
            'locale_id': 2 ** 70, 'key': 'a', 'value': 'b'
        }, headers=auth_headers)

        assert response.status_code == 422
        assert response.json['errors']['locale_id'] == ['The selected locale_id is invalid.']

        response = client.post('/api/translations', json={
            'locale_id': en_locale['id'], 'key': 'a', 'value': 'b',
            'tags': [tags['web'], 2 ** 70]
        }, headers=auth_headers)

        assert response.status_code == 422
        assert response.json['errors']['tags'] == [f'The selected tags are invalid: {2 ** 70}.']

    def test_create_rejects_long_key(self, client, auth_headers, en_locale):
        response = client.post('/api/translations', json={
            'locale_id': en_locale['id'], 'key': 'k' * 256, 'value': 'v'
        }, headers=auth_headers)

        assert response.status_code == 422
        assert 'key' in response.json['errors']

    def test_create_rejects_non_json_body(self, client, auth_headers, db_session):
        response = client.post('/api/translations', data='not json', headers=auth_headers)

        assert response.status_code == 422

    def test_duplicate_key_in_same_locale_is_conflict(self, client, auth_headers, en_locale, make_translation):
        make_translation(en_locale['id'], key='unique.key', value='Original English')

        response = client.post('/api/translations', json={
            'locale_id': en_locale['id'],
            'key': 'unique.key',
            'value': 'Duplicate English'
        }, headers=auth_headers)

        assert response.status_code == 409
        assert response.json['error'] == 'Translation key already exists for this locale.'

        with client.application.app_context():
            rows = Translation.query.filter_by(key='unique.key').all()
            assert [row.value for row in rows] == ['Original English']

    def test_same_key_in_different_locales(self, client, auth_headers, en_locale, fr_locale):
        for locale, value in ((en_locale, 'Home'), (fr_locale, 'Accueil')):
            response = client.post('/api/translations', json={
                'locale_id': locale['id'], 'key': 'home.title', 'value': value
            }, headers=auth_headers)
            assert response.status_code == 201

        with client.application.app_context():
            assert Translation.query.filter_by(key='home.title').count() == 2

    def test_unauthenticated_create_writes_nothing(self, client, en_locale):
        response = client.post('/api/translations', json={
            'locale_id': en_locale['id'], 'key': 'unauth.key', 'value': 'Unauthorized value'
        })

        assert response.status_code == 401
        with client.application.app_context():
            assert Translation.query.count() == 0


class TestGetAndListTranslations:
    """Tests for GET /api/translations and GET /api/translations/:id"""

    def test_round_trip(self, client, auth_headers, en_locale, tags):
        created = client.post('/api/translations', json={
            'locale_id': en_locale['id'],
            'key': 'round.trip',
            'value': 'There and back',
            'tags': [tags['web']]
        }, headers=auth_headers).json

        response = client.get(f"/api/translations/{created['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json['locale_id'] == en_locale['id']
        assert response.json['key'] == 'round.trip'
        assert response.json['value'] == 'There and back'
        assert [t['id'] for t in response.json['tags']] == [tags['web']]

    def test_get_not_found(self, client, auth_headers):
        response = client.get('/api/translations/99999', headers=auth_headers)

        assert response.status_code == 404

    def test_out_of_range_id_is_not_found(self, client, auth_headers, db_session):
        huge = 2 ** 70

        assert client.get(f'/api/translations/{huge}', headers=auth_headers).status_code == 404
        assert client.put(f'/api/translations/{huge}', json={'value': 'x'}, headers=auth_headers).status_code == 404
        assert client.delete(f'/api/translations/{huge}', headers=auth_headers).status_code == 404

    def test_list_is_paginated_by_twenty(self, client, auth_headers, en_locale, make_translation):
        for i in range(25):
            make_translation(en_locale['id'], key=f'list.key.{i}')

        first = client.get('/api/translations', headers=auth_headers).json
        second = client.get('/api/translations?page=2', headers=auth_headers).json

        assert first['total'] == 25
        assert first['pages'] == 2
        assert first['per_page'] == 20
        assert len(first['translations']) == 20
        assert len(second['translations']) == 5
        assert second['current_page'] == 2
        assert first['translations'][0]['locale']['code'] == 'en'


class TestUpdateTranslation:
    """Tests for PUT /api/translations/:id"""

    def test_update_value(self, client, auth_headers, en_locale, make_translation):
        translation = make_translation(en_locale['id'], key='update.me', value='Old')

        response = client.put(f"/api/translations/{translation['id']}", json={
            'value': 'New'
        }, headers=auth_headers)

        assert response.status_code == 200
        assert response.json['value'] == 'New'
        assert response.json['key'] == 'update.me'

    def test_update_not_found(self, client, auth_headers, db_session):
        response = client.put('/api/translations/99999', json={'value': 'x'}, headers=auth_headers)

        assert response.status_code == 404

    def test_update_rejects_empty_value(self, client, auth_headers, en_locale, make_translation):
        translation = make_translation(en_locale['id'])

        response = client.patch(f"/api/translations/{translation['id']}", json={
            'value': '   '
        }, headers=auth_headers)

        assert response.status_code == 422

    def test_update_key_to_existing_key_is_conflict(self, client, auth_headers, en_locale, make_translation):
        make_translation(en_locale['id'], key='taken.key')
        translation = make_translation(en_locale['id'], key='free.key')

        response = client.put(f"/api/translations/{translation['id']}", json={
            'key': 'taken.key'
        }, headers=auth_headers)

        assert response.status_code == 409

    def test_update_locale_into_existing_pair_is_conflict(self, client, auth_headers, en_locale, fr_locale, make_translation):
        make_translation(fr_locale['id'], key='shared.key')
        translation = make_translation(en_locale['id'], key='shared.key')

        response = client.put(f"/api/translations/{translation['id']}", json={
            'locale_id': fr_locale['id']
        }, headers=auth_headers)

        assert response.status_code == 409

    def test_update_to_own_key_is_not_conflict(self, client, auth_headers, en_locale, make_translation):
        translation = make_translation(en_locale['id'], key='same.key')

        response = client.put(f"/api/translations/{translation['id']}", json={
            'key': 'same.key', 'value': 'Changed'
        }, headers=auth_headers)

        assert response.status_code == 200

    def test_replace_tags(self, client, auth_headers, en_locale, tags, make_translation):
        translation = make_translation(en_locale['id'], tag_ids=[tags['mobile'], tags['web']])

        response = client.put(f"/api/translations/{translation['id']}", json={
            'tags': [tags['web'], tags['desktop']]
        }, headers=auth_headers)

        assert response.status_code == 200
        assert sorted(t['name'] for t in response.json['tags']) == ['desktop', 'web']

    def test_tags_only_update_keeps_key_and_value(self, client, auth_headers, en_locale, tags, make_translation):
        translation = make_translation(en_locale['id'], key='tagged.key', value='Tagged')

        response = client.put(f"/api/translations/{translation['id']}", json={
            'tags': [tags['mobile']]
        }, headers=auth_headers)

        assert response.json['key'] == 'tagged.key'
        assert response.json['value'] == 'Tagged'
        assert [t['name'] for t in response.json['tags']] == ['mobile']

    def test_empty_tags_detaches_all(self, client, auth_headers, en_locale, tags, make_translation):
        translation = make_translation(en_locale['id'], tag_ids=[tags['mobile'], tags['web']])

        client.put(f"/api/translations/{translation['id']}", json={'tags': []}, headers=auth_headers)
        response = client.get(f"/api/translations/{translation['id']}", headers=auth_headers)

        assert response.json['tags'] == []

    def test_absent_tags_left_untouched(self, client, auth_headers, en_locale, tags, make_translation):
        translation = make_translation(en_locale['id'], tag_ids=[tags['mobile']])

        response = client.put(f"/api/translations/{translation['id']}", json={
            'value': 'Only the value'
        }, headers=auth_headers)

        assert [t['name'] for t in response.json['tags']] == ['mobile']

    def test_null_tags_rejected(self, client, auth_headers, en_locale, make_translation):
        translation = make_translation(en_locale['id'])

        response = client.put(f"/api/translations/{translation['id']}", json={
            'tags': None
        }, headers=auth_headers)

        assert response.status_code == 422
        assert 'tags' in response.json['errors']


class TestDeleteTranslation:
    """Tests for DELETE /api/translations/:id"""

    def test_delete(self, client, auth_headers, en_locale, tags, make_translation):
        translation = make_translation(en_locale['id'], tag_ids=[tags['mobile']])

        response = client.delete(f"/api/translations/{translation['id']}", headers=auth_headers)

        assert response.status_code == 204
        assert response.data == b''

        get_response = client.get(f"/api/translations/{translation['id']}", headers=auth_headers)
        assert get_response.status_code == 404

    def test_delete_not_found(self, client, auth_headers, db_session):
        response = client.delete('/api/translations/99999', headers=auth_headers)

        assert response.status_code == 404

    def test_unauthenticated_delete_keeps_row(self, client, en_locale, make_translation):
        translation = make_translation(en_locale['id'])

        response = client.delete(f"/api/translations/{translation['id']}")

        assert response.status_code == 401
        with client.application.app_context():
            assert db.session.get(Translation, translation['id']) is not None
