"""
Tests for the admin edit screens and the inspector table placed on them.
"""

from app.schemas.meta import EntityType
from app.services.meta_service import add_meta


class TestPostScreen:
    async def test_admin_sees_meta_table(self, client, test_db, test_post, admin_auth_headers, meta_inspector_plugin):
        await add_meta(test_db, EntityType.POST, test_post.id, "color", "blue")
        await add_meta(test_db, EntityType.POST, test_post.id, "color", "green")

        response = await client.get(f"/admin/posts/{test_post.id}/edit", headers=admin_auth_headers)

        assert response.status_code == 200
        html = response.text
        assert "Edit Post: Hello World" in html
        assert "Post Meta Inspector" in html
        assert 'data-type="post"' in html
        assert f'data-object-id="{test_post.id}"' in html
        assert html.count('class="meta-value"') == 2
        assert "/static/meta_inspector.js" in html

    async def test_editor_sees_screen_without_table(
        self, client, test_db, test_post, editor_auth_headers, meta_inspector_plugin
    ):
        await add_meta(test_db, EntityType.POST, test_post.id, "color", "blue")

        response = await client.get(f"/admin/posts/{test_post.id}/edit", headers=editor_auth_headers)

        assert response.status_code == 200
        assert "meta-inspector" not in response.text
        assert "meta_inspector.js" not in response.text

    async def test_no_meta_no_table(self, client, test_post, admin_auth_headers, meta_inspector_plugin):
        response = await client.get(f"/admin/posts/{test_post.id}/edit", headers=admin_auth_headers)

        assert response.status_code == 200
        assert "meta-inspector" not in response.text

    async def test_missing_post(self, client, admin_auth_headers, meta_inspector_plugin):
        response = await client.get("/admin/posts/999/edit", headers=admin_auth_headers)

        assert response.status_code == 404
        assert response.json()["error"]["error_code"] == "RESOURCE_CONTENT_NOT_FOUND"

    async def test_plain_user_cannot_open_editor(self, client, test_post, user_auth_headers):
        response = await client.get(f"/admin/posts/{test_post.id}/edit", headers=user_auth_headers)

        assert response.status_code == 403


class TestTermScreen:
    async def test_term_meta_from_tag_id(self, client, test_db, test_term, admin_auth_headers, meta_inspector_plugin):
        await add_meta(test_db, EntityType.TERM, test_term.id, "icon", "star")

        response = await client.get(
            "/admin/terms/edit", params={"tag_ID": test_term.id, "taxonomy": "category"}, headers=admin_auth_headers
        )

        assert response.status_code == 200
        assert "Term Meta" in response.text
        assert 'data-type="term"' in response.text
        assert 'data-original-value="star"' in response.text

    async def test_unknown_term(self, client, admin_auth_headers, meta_inspector_plugin):
        response = await client.get("/admin/terms/edit", params={"tag_ID": 404}, headers=admin_auth_headers)

        assert response.status_code == 404

    async def test_non_numeric_tag_id(self, client, admin_auth_headers):
        response = await client.get("/admin/terms/edit", params={"tag_ID": "abc"}, headers=admin_auth_headers)

        assert response.status_code == 422
        assert response.json()["error"]["details"]["validation_errors"][0]["field"] == "tag_ID"


class TestUserScreens:
    async def test_own_profile_shows_own_meta(self, client, test_db, test_admin, admin_auth_headers, meta_inspector_plugin):
        await add_meta(test_db, EntityType.USER, test_admin.id, "nickname", "boss")

        response = await client.get("/admin/profile", headers=admin_auth_headers)

        assert response.status_code == 200
        assert "User Meta" in response.text
        assert f'data-object-id="{test_admin.id}"' in response.text
        assert ">boss</td>" in response.text

    async def test_profile_of_non_admin_has_no_table(self, client, test_db, test_user, user_auth_headers, meta_inspector_plugin):
        await add_meta(test_db, EntityType.USER, test_user.id, "nickname", "pal")

        response = await client.get("/admin/profile", headers=user_auth_headers)

        assert response.status_code == 200
        assert "meta-inspector" not in response.text

    async def test_other_user_from_query(
        self, client, test_db, test_admin, test_editor, admin_auth_headers, meta_inspector_plugin
    ):
        await add_meta(test_db, EntityType.USER, test_editor.id, "nickname", "ed")

        response = await client.get("/admin/users/edit", params={"user_id": test_editor.id}, headers=admin_auth_headers)

        assert response.status_code == 200
        assert "Edit User testeditor" in response.text
        assert f'data-object-id="{test_editor.id}"' in response.text
        assert ">ed</td>" in response.text

    async def test_unknown_user(self, client, admin_auth_headers, meta_inspector_plugin):
        response = await client.get("/admin/users/edit", params={"user_id": 999}, headers=admin_auth_headers)

        assert response.status_code == 404
        assert response.json()["error"]["error_code"] == "RESOURCE_USER_NOT_FOUND"
