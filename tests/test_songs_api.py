from goonj.db.models.playlist import Playlist, PlaylistSong
from goonj.db.models.song import Song
from conftest import register


def test_health_reports_database_online(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "success", "message": "Goonj API is online"}


def test_list_songs_empty(client):
    response = client.get("/api/songs")
    assert response.status_code == 200
    assert response.json() == {"status": "success", "data": []}


def test_list_songs_newest_first(client, make_song):
    oldest = make_song(title="Tumar Kotha")
    middle = make_song(title="Tum Hi Ho")
    newest = make_song(title="Shape of You")

    data = client.get("/api/songs").json()["data"]
    assert [song["id"] for song in data] == [newest.id, middle.id, oldest.id]


def test_list_songs_filters_by_language_and_genre(client, make_song):
    make_song(title="Tumar Kotha", language="Assamese", genre="Pop")
    tum_hi_ho = make_song(title="Tum Hi Ho", language="Hindi", genre="Bollywood")
    make_song(title="Kesariya", language="Hindi", genre="Pop")

    hindi = client.get("/api/songs", params={"language": "Hindi"}).json()["data"]
    assert {song["title"] for song in hindi} == {"Tum Hi Ho", "Kesariya"}

    bollywood = client.get("/api/songs", params={"language": "Hindi", "genre": "Bollywood"}).json()["data"]
    assert [song["id"] for song in bollywood] == [tum_hi_ho.id]


def test_upload_song_applies_defaults(client):
    response = client.post("/api/songs", json={
        "title": "Bihu Geet",
        "artist": "Papon",
        "audio_url": "https://cdn.goonj.test/bihu.mp3",
    })
    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "success"
    song = body["data"]
    assert song["title"] == "Bihu Geet"
    assert song["language"] == "Unknown"
    assert song["genre"] == "Pop"
    assert song["era"] == "2020s"
    assert song["cover_image_url"] == "https://via.placeholder.com/500"
    assert song["duration_seconds"] == 0
    assert song["lyrics"] is None
    assert song["id"]


def test_upload_song_keeps_supplied_fields(client):
    response = client.post("/api/songs", json={
        "title": "Tum Hi Ho",
        "artist": "Arijit Singh",
        "audio_url": "https://cdn.goonj.test/tum.mp3",
        "language": "Hindi",
        "cover_image_url": "https://images.goonj.test/tum.jpg",
        "lyrics": "Hum tere bin ab reh nahi sakte",
    })
    song = response.json()["data"]
    assert song["language"] == "Hindi"
    assert song["cover_image_url"] == "https://images.goonj.test/tum.jpg"
    assert song["lyrics"] == "Hum tere bin ab reh nahi sakte"


def test_upload_song_missing_required_fields_is_rejected(client, db_session):
    response = client.post("/api/songs", json={"title": "No artist", "audio_url": ""})
    assert response.status_code == 400
    body = response.json()
    assert body["status"] == "error"
    assert "artist" in body["message"]
    assert "audio_url" in body["message"]
    assert db_session.query(Song).count() == 0


def test_delete_song(client, make_song, db_session):
    song = make_song()

    response = client.delete(f"/api/songs/{song.id}")
    assert response.status_code == 200
    assert response.json() == {"status": "success", "message": "Song deleted"}

    db_session.expire_all()
    assert db_session.query(Song).count() == 0


def test_delete_unknown_song_returns_404(client):
    response = client.delete("/api/songs/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"status": "error", "message": "Song not found"}


def test_delete_song_removes_its_playlist_entries(client, make_song, db_session):
    song = make_song()
    user = register(client)["user"]
    playlist = Playlist(title="Road trip", user_id=user["id"])
    db_session.add(playlist)
    db_session.commit()
    db_session.add(PlaylistSong(playlist_id=playlist.id, song_id=song.id))
    db_session.commit()

    assert client.delete(f"/api/songs/{song.id}").status_code == 200

    db_session.expire_all()
    assert db_session.query(PlaylistSong).count() == 0
