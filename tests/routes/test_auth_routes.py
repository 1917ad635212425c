def test_login_sets_session_for_api_calls(client, member_user, user_password):
    response = client.post(
        "/api/auth/login",
        json={"username": "member1", "password": user_password},
    )
    assert response.status_code == 200
    assert response.get_json()["user"]["id"] == member_user.id

    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.get_json()["user"]["username"] == "member1"


def test_login_rejects_bad_password(client, member_user):
    response = client.post(
        "/api/auth/login",
        json={"username": "member1", "password": "wrong"},
    )
    assert response.status_code == 401


def test_logout_clears_session(login, member_user):
    client = login(member_user)

    assert client.post("/api/auth/logout").status_code == 200
    assert client.get("/api/auth/me").status_code == 401


def test_switching_users_within_one_test(login, member_user, owner_user):
    login(member_user)
    client = login(owner_user)

    me = client.get("/api/auth/me")
    assert me.get_json()["user"]["id"] == owner_user.id
    assert me.get_json()["user"]["username"] == "owner1"
