"""Catalog page tests."""
from fastapi import status

from tests.conftest import post_form


class TestDashboardAccess:
    """Test the session gate on the dashboard."""

    def test_unauthenticated_redirects_to_login(self, client, gateway):
        response = client.get("/dashboard", follow_redirects=False)
        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert response.headers["Location"] == "/login"
        assert gateway.calls_to("list_documents") == []

    def test_expired_session_redirects_to_login(self, client, gateway):
        client.cookies.set("catalog_session", "stale")
        response = client.get("/dashboard", follow_redirects=False)
        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert response.headers["Location"] == "/login"

    def test_root_goes_to_dashboard(self, client):
        response = client.get("/", follow_redirects=False)
        assert response.headers["Location"] == "/dashboard"


class TestViewerDashboard:
    """Viewers get the list and nothing else."""

    def test_sees_all_fields_without_controls(self, viewer_client):
        response = viewer_client.get("/dashboard")
        assert response.status_code == status.HTTP_200_OK
        html = response.text

        assert "Widget" in html
        assert "₱9.99" in html
        assert "A useful widget" in html
        assert "Tools" in html
        assert "In Stock" in html

        assert "Gadget" in html
        assert "₱24.50" in html
        assert "No description" in html
        assert "Uncategorized" in html
        assert "Out of Stock" in html

        assert "read-only access" in html
        assert html.count('action="/auth/logout"') == 2
        assert "Add New Product" not in html
        assert "/dashboard/save" not in html
        assert "?edit=" not in html
        assert "/delete" not in html

    def test_save_is_ignored(self, viewer_client, gateway):
        response = post_form(
            viewer_client,
            "/dashboard/save",
            {"name": "Sneaky", "price": "1"},
            follow_redirects=False,
        )
        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert gateway.mutation_calls == []

    def test_delete_is_ignored(self, viewer_client, gateway):
        response = post_form(viewer_client, "/dashboard/abc/delete", {"confirm": "yes"}, follow_redirects=False)
        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert gateway.mutation_calls == []

    def test_edit_param_is_ignored(self, viewer_client):
        response = viewer_client.get("/dashboard?edit=abc")
        assert "Update Product" not in response.text

    def test_delete_confirmation_not_offered(self, viewer_client):
        response = viewer_client.get("/dashboard/abc/delete", follow_redirects=False)
        assert response.status_code == status.HTTP_303_SEE_OTHER


class TestEditorDashboard:
    """Editors get the form and per-item controls."""

    def test_sees_form_and_controls(self, editor_client):
        html = editor_client.get("/dashboard").text
        assert "Add New Product" in html
        assert "/dashboard?edit=abc" in html
        assert "/dashboard/abc/delete" in html
        assert "Signed in as <strong>Editor</strong>" in html

    def test_create_product(self, editor_client, gateway):
        response = post_form(
            editor_client,
            "/dashboard/save",
            {"name": "Lamp", "price": "9.99", "in_stock": "on"},
            follow_redirects=False,
        )
        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert response.headers["Location"] == "/dashboard"

        (call,) = gateway.calls_to("create_document")
        _, document_id, data, permissions = call
        assert len(document_id) == 20
        assert data == {"name": "Lamp", "price": 9.99, "description": None, "category": None, "inStock": True}
        assert 'read("team:editors")' in permissions
        assert 'read("team:viewers")' in permissions
        assert 'update("team:editors")' in permissions
        assert 'delete("team:editors")' in permissions
        assert not any("viewers" in p and not p.startswith("read") for p in permissions)

        assert "Lamp" in editor_client.get("/dashboard").text

    def test_create_reloads_list_once(self, editor_client, gateway):
        response = post_form(editor_client, "/dashboard/save", {"name": "Lamp", "price": "9.99"})
        assert response.status_code == status.HTTP_200_OK
        assert "Lamp" in response.text
        assert len(gateway.calls_to("list_documents")) == 1
        assert [c[0] for c in gateway.mutation_calls] == ["create_document"]

    def test_delete_reloads_list_once(self, editor_client, gateway):
        response = post_form(editor_client, "/dashboard/abc/delete", {"confirm": "yes"})
        assert response.status_code == status.HTTP_200_OK
        assert "Widget" not in response.text
        assert len(gateway.calls_to("list_documents")) == 1

    def test_reload_failure_after_save_is_shown(self, editor_client, gateway):
        from catalog_admin.gateway import NetworkError

        gateway.fail_on["list_documents"] = NetworkError("down")
        response = post_form(editor_client, "/dashboard/save", {"name": "Lamp", "price": "9.99"})
        assert len(gateway.calls_to("create_document")) == 1
        assert "Failed to load products" in response.text

    def test_unchecked_stock_box_means_out_of_stock(self, editor_client, gateway):
        post_form(editor_client, "/dashboard/save", {"name": "Lamp", "price": "3"})
        (call,) = gateway.calls_to("create_document")
        assert call[2]["inStock"] is False

    def test_edit_populates_form(self, editor_client):
        html = editor_client.get("/dashboard?edit=abc").text
        assert "Update Product" in html
        assert 'name="product_id" value="abc"' in html
        assert 'value="Widget"' in html
        assert 'value="9.99"' in html
        assert "Cancel" in html

    def test_edit_unknown_id_stays_in_create_mode(self, editor_client):
        html = editor_client.get("/dashboard?edit=missing").text
        assert "Add New Product" in html

    def test_update_product(self, editor_client, gateway):
        response = post_form(
            editor_client,
            "/dashboard/save",
            {"name": "Widget Pro", "price": "19", "product_id": "abc", "in_stock": "on"},
            follow_redirects=False,
        )
        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert gateway.calls_to("create_document") == []
        (call,) = gateway.calls_to("update_document")
        assert call[1] == "abc"
        assert call[2]["name"] == "Widget Pro"

    def test_failed_save_keeps_typed_input(self, editor_client, gateway):
        from catalog_admin.gateway import PermissionDeniedError

        gateway.fail_on["create_document"] = PermissionDeniedError("nope", 401, "user_unauthorized")
        response = post_form(
            editor_client,
            "/dashboard/save",
            {"name": "Half typed", "price": "4.5", "description": "draft text"},
        )
        assert response.status_code == status.HTTP_200_OK
        assert "Failed to save product" in response.text
        assert 'value="Half typed"' in response.text
        assert "draft text" in response.text
        assert "nope" not in response.text

    def test_delete_confirmation_page(self, editor_client):
        response = editor_client.get("/dashboard/abc/delete")
        assert response.status_code == status.HTTP_200_OK
        assert "Delete this product?" in response.text
        assert "Widget" in response.text

    def test_declined_delete_makes_no_call(self, editor_client, gateway):
        response = post_form(editor_client, "/dashboard/abc/delete", {"confirm": "no"}, follow_redirects=False)
        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert gateway.calls_to("delete_document") == []
        assert "Widget" in editor_client.get("/dashboard").text

    def test_confirmed_delete(self, editor_client, gateway):
        response = post_form(editor_client, "/dashboard/abc/delete", {"confirm": "yes"}, follow_redirects=False)
        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert gateway.calls_to("delete_document") == [("delete_document", "abc")]
        assert "Widget" not in editor_client.get("/dashboard").text

    def test_failed_delete_shows_error(self, editor_client, gateway):
        from catalog_admin.gateway import NetworkError

        gateway.fail_on["delete_document"] = NetworkError("down")
        response = post_form(editor_client, "/dashboard/abc/delete", {"confirm": "yes"})
        assert response.status_code == status.HTTP_200_OK
        assert "Failed to delete product" in response.text
        assert "Widget" in response.text

    def test_load_failure_is_recoverable(self, editor_client, gateway):
        from catalog_admin.gateway import NetworkError

        gateway.fail_on["list_documents"] = NetworkError("down")
        response = editor_client.get("/dashboard")
        assert response.status_code == status.HTTP_200_OK
        assert "Failed to load products" in response.text
        assert "No products found." in response.text


class TestOpenProductsPage:
    """The /products variant has no session gate and no role gate."""

    def test_anonymous_visitor_gets_list_and_form(self, client):
        response = client.get("/products")
        assert response.status_code == status.HTTP_200_OK
        assert "Widget" in response.text
        assert "Add New Product" in response.text
        assert "Sign in" in response.text

    def test_viewer_gets_controls_backend_decides(self, viewer_client, gateway):
        from catalog_admin.gateway import PermissionDeniedError

        assert "/products/abc/delete" in viewer_client.get("/products").text

        gateway.fail_on["delete_document"] = PermissionDeniedError("nope", 401, "user_unauthorized")
        response = post_form(viewer_client, "/products/abc/delete", {"confirm": "yes"})
        assert gateway.calls_to("delete_document") == [("delete_document", "abc")]
        assert "You do not have permission" in response.text
