def create_tag(client, name):
    response = client.post("/api/v1/tags", json={"name": name})
    assert response.status_code == 201, response.text
    return response.json()


def test_create_tag(client):
    response = client.post("/api/v1/tags", json={"name": "Important", "description": "ignored"})

    assert response.status_code == 201
    data = response.json()
    assert isinstance(data["id"], int)
    assert data["name"] == "Important"
    assert data["slug"] == "important"
    assert data["usage_count"] == 0
    assert data["book_count"] == 0
    assert data["note_count"] == 0
    assert data["created_at"] is not None


def test_create_tag_keeps_non_latin_letters(client):
    data = create_tag(client, "Rust编程")

    assert data["slug"] == "rust编程"


def test_create_duplicate_tag(client):
    create_tag(client, "Important")

    response = client.post("/api/v1/tags", json={"name": "Important"})

    assert response.status_code == 400
    assert response.json() == {"error": "BAD_REQUEST", "detail": "Tag 'Important' already exists"}


def test_create_tag_empty_name(client):
    response = client.post("/api/v1/tags", json={"name": ""})

    assert response.status_code == 422
    assert response.json()["detail"] == "Tag name is required"


def test_create_tag_missing_name(client):
    response = client.post("/api/v1/tags", json={})

    assert response.status_code == 422


def test_get_tag(client):
    created = create_tag(client, "测试标签")

    response = client.get(f"/api/v1/tags/{created['id']}")

    assert response.status_code == 200
    assert response.json()["name"] == "测试标签"
    assert response.json()["slug"] == "测试标签"


def test_get_tag_not_found(client):
    response = client.get("/api/v1/tags/99999")

    assert response.status_code == 404
    assert response.json()["error"] == "NOT_FOUND"


def test_list_tags_defaults(client):
    for i in range(1, 4):
        create_tag(client, f"标签{i}")

    response = client.get("/api/v1/tags")

    data = response.json()
    assert data["total"] == 3
    assert data["page"] == 1
    assert data["per_page"] == 20
    assert data["total_pages"] == 1
    assert len(data["tags"]) == 3


def test_list_tags_pagination(client):
    for i in range(1, 6):
        create_tag(client, f"分页测试标签{i}")

    response = client.get("/api/v1/tags?page=1&per_page=2")

    data = response.json()
    assert data["total"] == 5
    assert data["per_page"] == 2
    assert data["total_pages"] == 3
    assert len(data["tags"]) == 2


def test_list_tags_clamps_page_size(client):
    response = client.get("/api/v1/tags?page=0&per_page=1000")

    data = response.json()
    assert data["page"] == 1
    assert data["per_page"] == 100


def test_list_tags_zero_page_size_clamps_to_one(client):
    for i in range(3):
        create_tag(client, f"tag {i}")

    data = client.get("/api/v1/tags?per_page=0").json()

    assert data["per_page"] == 1
    assert len(data["tags"]) == 1
    assert data["total_pages"] == 3


def test_update_tag(client):
    created = create_tag(client, "原始标签名")

    response = client.put(f"/api/v1/tags/{created['id']}", json={"name": "更新后的标签名"})

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == created["id"]
    assert data["name"] == "更新后的标签名"
    assert data["slug"] == "更新后的标签名"


def test_update_tag_refreshes_cached_usage(client, create_note):
    create_note(tags=["Rust"])
    create_note(tags=["Rust"])
    rust = client.get("/api/v1/tags").json()["tags"][0]
    assert rust["note_count"] == 2
    assert rust["usage_count"] == 0

    response = client.put(f"/api/v1/tags/{rust['id']}", json={"name": "Rust"})

    assert response.json()["usage_count"] == 2


def test_update_tag_duplicate_name(client):
    create_tag(client, "标签1")
    second = create_tag(client, "标签2")

    response = client.put(f"/api/v1/tags/{second['id']}", json={"name": "标签1"})

    assert response.status_code == 400
    assert "already exists" in response.json()["detail"]


def test_update_tag_empty_name(client):
    created = create_tag(client, "原始标签")

    response = client.put(f"/api/v1/tags/{created['id']}", json={"name": ""})

    assert response.status_code == 422
    assert "cannot be empty" in response.json()["detail"]


def test_update_tag_not_found(client):
    response = client.put("/api/v1/tags/99999", json={"name": "不存在的标签"})

    assert response.status_code == 404


def test_delete_tag(client):
    created = create_tag(client, "要删除的标签")

    response = client.delete(f"/api/v1/tags/{created['id']}")
    assert response.status_code == 204

    assert client.get(f"/api/v1/tags/{created['id']}").status_code == 404
    assert client.delete(f"/api/v1/tags/{created['id']}").status_code == 404


def test_delete_tag_not_found(client):
    assert client.delete("/api/v1/tags/99999").status_code == 404


def test_note_tags_show_up_in_tag_listing(client, create_note):
    response = client.get("/api/v1/tags")
    assert response.json()["total"] == 0

    note = create_note(tags=["Rust", "编程", "内存管理"])
    assert sorted(note["tags"]) == sorted(["Rust", "编程", "内存管理"])

    data = client.get("/api/v1/tags").json()
    assert data["total"] == 3
    for tag in data["tags"]:
        assert tag["note_count"] == 1
        assert tag["book_count"] == 0


def test_popular_tags_with_limit(client):
    ids = [create_tag(client, f"标签{i}")["id"] for i in range(1, 6)]
    assert len(ids) == 5

    response = client.get("/api/v1/tags/popular?limit=3")

    assert response.status_code == 200
    popular = response.json()
    assert len(popular) == 3
    assert set(popular[0]) == {"id", "name", "slug", "usage_count"}


def test_popular_tags_are_ranked_by_refreshed_usage(client, create_note):
    create_note(tags=["Rust", "编程"])
    create_note(tags=["Rust"])
    tags = {tag["name"]: tag["id"] for tag in client.get("/api/v1/tags").json()["tags"]}
    for name, tag_id in tags.items():
        client.put(f"/api/v1/tags/{tag_id}", json={"name": name})

    popular = client.get("/api/v1/tags/popular").json()

    assert [(tag["name"], tag["usage_count"]) for tag in popular] == [("Rust", 2), ("编程", 1)]


def test_popular_tags_limit_is_clamped(client):
    for i in range(3):
        create_tag(client, f"tag {i}")

    assert len(client.get("/api/v1/tags/popular?limit=0").json()) == 1
    assert len(client.get("/api/v1/tags/popular?limit=500").json()) == 3
