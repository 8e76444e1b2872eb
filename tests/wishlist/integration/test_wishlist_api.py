class TestWishlistApi:
    def test_add_list_remove(self, client, auth, make_user, make_game):
        user = make_user(name="Nadia", email="nadia@example.com")
        game = make_game(title="Hades")

        response = client.post("/wishlist", json={"game_id": game.id}, headers=auth(user))
        assert response.status_code == 201
        assert [g["title"] for g in response.json()["data"]] == ["Hades"]

        assert [g["id"] for g in client.get("/wishlist", headers=auth(user)).json()["data"]] == [game.id]

        response = client.delete(f"/wishlist/{game.id}", headers=auth(user))
        assert response.status_code == 200
        assert response.json()["data"] == []

    def test_requires_authentication(self, client):
        assert client.get("/wishlist").status_code == 401
