"""Missing pet posts, donation posts, adoption applications and meetings."""

import pytest
from sqlalchemy import func, select

from app.modules.community.infrastructure.database.models import AdoptionFormModel, CommentModel, UpvoteModel
from tests.conftest import PNG_BASE64


def missing_payload(**overrides):
    payload = {
        "title": "Lost tabby",
        "description": "Orange cat, green collar",
        "imageBase64": PNG_BASE64,
        "country": "Bangladesh",
        "city": "Dhaka",
        "area": "Gulshan",
        "species": "cat",
        "breed": "Tabby",
        "age": 3,
    }
    payload.update(overrides)
    return payload


def donation_payload(**overrides):
    payload = missing_payload(title="Kitten needs a home", gender="female", vaccinated=True)
    payload.update(overrides)
    return payload


@pytest.fixture
def missing_post(client):
    def _create(account, **overrides):
        response = client.post("/api/users/missingposts", json=missing_payload(**overrides), headers=account.headers)
        assert response.status_code == 201
        return response.json()["post"]

    return _create


@pytest.fixture
def donation_post(client):
    def _create(account, **overrides):
        response = client.post("/api/users/donation", json=donation_payload(**overrides), headers=account.headers)
        assert response.status_code == 201
        return response.json()["post"]

    return _create


def attached_rows(run_db, post_id):
    """Adoption forms, upvotes and comments still stored for a donation post."""

    async def work(session):
        counts = {}
        for name, model in (
            ("adoption_forms", AdoptionFormModel),
            ("upvotes", UpvoteModel),
            ("comments", CommentModel),
        ):
            stmt = select(func.count(model.id)).where(model.donation_post_id == post_id)
            counts[name] = (await session.execute(stmt)).scalar_one()
        return counts

    return run_db(work)


def adopt(client, account, post_id, when="2030-05-01T10:00:00Z"):
    return client.post(
        f"/api/users/donation/{post_id}/apply",
        json={"description": "We have a garden", "meetingSchedule": when},
        headers=account.headers,
    )


class TestMissingPosts:
    def test_create_uploads_image_and_alerts_neighbours(
        self, client, make_user, storage, missing_post, notifications_of
    ):
        author = make_user(city="Dhaka", area="Gulshan")
        neighbour = make_user(city="dhaka", area="gulshan")
        far_away = make_user(city="Dhaka", area="Banani")

        post = missing_post(author)

        assert post["status"] == "NOT_FOUND"
        assert post["images"] == storage.uploads[-1]
        assert "/missing_posts/" in post["images"]
        assert post["city"] == "dhaka"
        assert post["_count"] == {"comments": 0, "upvotes": 0}

        assert [n.message for n in notifications_of(neighbour.id)] == [
            "Missing pet reported in your area: Lost tabby"
        ]
        assert notifications_of(far_away.id) == []
        assert notifications_of(author.id) == []

    def test_missing_field(self, client, make_user):
        author = make_user()
        response = client.post(
            "/api/users/missingposts", json=missing_payload(species=""), headers=author.headers
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Missing required field: species"

    def test_list_filters(self, client, make_user, missing_post):
        author, other = make_user(), make_user()
        gulshan = missing_post(author)
        missing_post(other, area="Banani")

        everything = client.get("/api/users/missingposts", headers=author.headers).json()["posts"]
        mine = client.get("/api/users/missingposts?mine=true", headers=other.headers).json()["posts"]
        area = client.get(
            "/api/users/missingposts?city=DHAKA&area=gulshan", headers=other.headers
        ).json()["posts"]

        assert len(everything) == 2
        assert [post["area"] for post in mine] == ["banani"]
        assert [post["id"] for post in area] == [gulshan["id"]]

    def test_found_posts_leave_the_area_listing(self, client, make_user, missing_post):
        author = make_user()
        post = missing_post(author)
        client.patch(f"/api/users/missingposts/{post['id']}", json={"status": "FOUND"}, headers=author.headers)

        area = client.get("/api/users/missingposts?city=dhaka&area=gulshan", headers=author.headers)

        assert area.json()["posts"] == []

    def test_detail_and_head_report_upvote(self, client, make_user, missing_post):
        author, fan = make_user(), make_user()
        post = missing_post(author)
        client.post(f"/api/users/missingposts/{post['id']}/upvote", headers=fan.headers)

        detail = client.get(f"/api/users/missingposts/{post['id']}", headers=fan.headers).json()
        head_fan = client.head(f"/api/users/missingposts/{post['id']}", headers=fan.headers)
        head_author = client.head(f"/api/users/missingposts/{post['id']}", headers=author.headers)

        assert detail["hasUpvoted"] is True
        assert detail["post"]["upvotesCount"] == 1
        assert detail["post"]["_count"]["upvotes"] == 1
        assert head_fan.status_code == 200
        assert head_fan.headers["X-Has-Upvoted"] == "true"
        assert head_author.headers["X-Has-Upvoted"] == "false"

    def test_head_unknown_post(self, client, make_user):
        author = make_user()
        assert client.head("/api/users/missingposts/nope", headers=author.headers).status_code == 404

    def test_update_replaces_image(self, client, make_user, storage, missing_post):
        author = make_user()
        post = missing_post(author)

        response = client.put(
            f"/api/users/missingposts/{post['id']}",
            json={"title": "Found collar", "imageBase64": PNG_BASE64},
            headers=author.headers,
        )

        assert response.status_code == 200
        updated = response.json()["post"]
        assert updated["title"] == "Found collar"
        assert updated["description"] == "Orange cat, green collar"
        assert updated["images"] == storage.uploads[-1]
        assert storage.deleted == [post["images"]]

    def test_only_author_updates(self, client, make_user, missing_post):
        author, other = make_user(), make_user()
        post = missing_post(author)

        response = client.put(f"/api/users/missingposts/{post['id']}", json={"title": "Mine"}, headers=other.headers)

        assert response.status_code == 403
        assert response.json()["message"] == "You can only update your own posts"

    def test_status_found_notifies_area(self, client, make_user, missing_post, notifications_of):
        author = make_user()
        neighbour = make_user(city="Dhaka", area="Gulshan")
        post = missing_post(author)

        response = client.patch(
            f"/api/users/missingposts/{post['id']}", json={"status": "FOUND"}, headers=author.headers
        )

        assert response.json()["post"]["status"] == "FOUND"
        assert notifications_of(neighbour.id)[-1].type == "PET_FOUND"

    def test_invalid_status(self, client, make_user, missing_post):
        author = make_user()
        post = missing_post(author)

        response = client.patch(
            f"/api/users/missingposts/{post['id']}", json={"status": "LOST"}, headers=author.headers
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid status"

    def test_delete_removes_image(self, client, make_user, storage, missing_post):
        author, other = make_user(), make_user()
        post = missing_post(author)

        forbidden = client.delete(f"/api/users/missingposts/{post['id']}", headers=other.headers)
        deleted = client.delete(f"/api/users/missingposts/{post['id']}", headers=author.headers)

        assert forbidden.status_code == 403
        assert forbidden.json()["message"] == "You can only delete your own posts"
        assert deleted.json() == {"message": "Post deleted successfully"}
        assert storage.deleted == [post["images"]]
        assert client.get(f"/api/users/missingposts/{post['id']}", headers=author.headers).status_code == 404


class TestUpvotes:
    def test_upvote_once(self, client, make_user, missing_post):
        author, fan = make_user(), make_user()
        post = missing_post(author)

        first = client.post(f"/api/users/missingposts/{post['id']}/upvote", headers=fan.headers)
        second = client.post(f"/api/users/missingposts/{post['id']}/upvote", headers=fan.headers)

        assert first.json()["upvotesCount"] == 1
        assert second.status_code == 400
        assert second.json()["message"] == "You have already upvoted this post"

    def test_remove_upvote(self, client, make_user, missing_post):
        author, fan = make_user(), make_user()
        post = missing_post(author)

        missing = client.post(f"/api/users/missingposts/{post['id']}/remove-upvote", headers=fan.headers)
        client.post(f"/api/users/missingposts/{post['id']}/upvote", headers=fan.headers)
        removed = client.post(f"/api/users/missingposts/{post['id']}/remove-upvote", headers=fan.headers)

        assert missing.status_code == 400
        assert missing.json()["message"] == "You have not upvoted this post"
        assert removed.json()["upvotesCount"] == 0

    def test_upvote_unknown_post(self, client, make_user):
        fan = make_user()
        response = client.post("/api/users/missingposts/nope/upvote", headers=fan.headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Post not found"


class TestComments:
    def test_comment_notifies_author(self, client, make_user, missing_post, notifications_of):
        author, helper = make_user(), make_user(name="Helper")
        post = missing_post(author)

        response = client.post(
            f"/api/users/missingposts/{post['id']}/comment", json={"content": " Seen near the park "},
            headers=helper.headers,
        )

        assert response.status_code == 201
        comment = response.json()["comment"]
        assert comment["content"] == "Seen near the park"
        assert comment["user"]["name"] == "Helper"
        assert notifications_of(author.id)[-1].message == 'Someone commented on your missing pet post: "Lost tabby"'

    def test_own_comment_does_not_notify(self, client, make_user, missing_post, notifications_of):
        author = make_user()
        post = missing_post(author)

        client.post(f"/api/users/missingposts/{post['id']}/comment", json={"content": "Still missing"},
                    headers=author.headers)

        assert notifications_of(author.id) == []

    def test_empty_comment(self, client, make_user, missing_post):
        author = make_user()
        post = missing_post(author)

        response = client.post(
            f"/api/users/missingposts/{post['id']}/comment", json={"content": "  "}, headers=author.headers
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Comment content is required"

    def test_comment_ordering(self, client, make_user, missing_post):
        author = make_user()
        post = missing_post(author)
        for text in ("first", "second"):
            client.post(f"/api/users/missingposts/{post['id']}/comment", json={"content": text},
                        headers=author.headers)

        listed = client.get(f"/api/users/missingposts/{post['id']}/comment", headers=author.headers).json()
        detail = client.get(f"/api/users/missingposts/{post['id']}", headers=author.headers).json()

        assert [c["content"] for c in listed["comments"]] == ["first", "second"]
        assert [c["content"] for c in detail["post"]["comments"]] == ["second", "first"]

    def test_delete_comment_rules(self, client, make_user, missing_post):
        author, other = make_user(), make_user()
        post = missing_post(author)
        other_post = missing_post(other)
        comment = client.post(
            f"/api/users/missingposts/{post['id']}/comment", json={"content": "Hi"}, headers=author.headers
        ).json()["comment"]

        forbidden = client.delete(f"/api/users/missingposts/{post['id']}/comment/{comment['id']}", headers=other.headers)
        wrong_post = client.delete(
            f"/api/users/missingposts/{other_post['id']}/comment/{comment['id']}", headers=author.headers
        )
        deleted = client.delete(f"/api/users/missingposts/{post['id']}/comment/{comment['id']}", headers=author.headers)

        assert forbidden.status_code == 403
        assert forbidden.json()["message"] == "You can only delete your own comments"
        assert wrong_post.status_code == 404
        assert wrong_post.json()["message"] == "Comment not found"
        assert deleted.json() == {"message": "Comment deleted successfully"}


class TestDonationPosts:
    def test_create_requires_gender(self, client, make_user):
        owner = make_user()
        response = client.post("/api/users/donation", json=donation_payload(gender=None), headers=owner.headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Missing required field: gender"

    def test_create(self, client, make_user, donation_post, notifications_of):
        owner = make_user()
        neighbour = make_user(city="Dhaka", area="Gulshan")

        post = donation_post(owner)

        assert post["isAvailable"] is True
        assert post["vaccinated"] is True
        assert post["neutered"] is False
        assert "/donation_posts/" in post["images"]
        assert post["_count"] == {"comments": 0, "upvotes": 0, "adoptionForms": 0}
        assert notifications_of(neighbour.id)[-1].message == "New pet donation in your area: Kitten needs a home"

    def test_mine_includes_applications(self, client, make_user, donation_post):
        owner, adopter = make_user(), make_user()
        post = donation_post(owner)
        adopt(client, adopter, post["id"])

        mine = client.get("/api/users/donation?mine=true", headers=owner.headers).json()["posts"]

        assert mine[0]["adoptionForms"][0]["userId"] == adopter.id
        assert mine[0]["_count"]["adoptionForms"] == 1

    def test_area_listing_hides_unavailable(self, client, make_user, donation_post):
        owner = make_user()
        post = donation_post(owner)
        client.put(f"/api/users/donation/{post['id']}", json={"isAvailable": False}, headers=owner.headers)

        area = client.get("/api/users/donation?city=Dhaka&area=Gulshan", headers=owner.headers)

        assert area.json()["posts"] == []

    def test_detail(self, client, make_user, donation_post):
        owner, adopter = make_user(), make_user()
        post = donation_post(owner)
        adopt(client, adopter, post["id"])
        client.post(f"/api/users/donation/{post['id']}/comment", json={"content": "Cute!"}, headers=adopter.headers)

        response = client.get(f"/api/users/donation/{post['id']}", headers=adopter.headers)

        body = response.json()
        assert body["hasUpvoted"] is False
        assert body["post"]["comments"][0]["content"] == "Cute!"
        assert body["post"]["adoptionForms"][0]["status"] == "PENDING"

    def test_delete_removes_everything_attached(self, client, make_user, storage, donation_post, run_db):
        owner, adopter = make_user(), make_user()
        post = donation_post(owner)
        adopt(client, adopter, post["id"])
        client.post(f"/api/users/donation/{post['id']}/upvote", headers=adopter.headers)
        client.post(f"/api/users/donation/{post['id']}/comment", json={"content": "Cute!"}, headers=adopter.headers)
        assert attached_rows(run_db, post["id"]) == {"adoption_forms": 1, "upvotes": 1, "comments": 1}

        forbidden = client.delete(f"/api/users/donation/{post['id']}", headers=adopter.headers)
        deleted = client.delete(f"/api/users/donation/{post['id']}", headers=owner.headers)

        assert forbidden.status_code == 403
        assert deleted.json() == {"message": "Post deleted successfully"}
        assert storage.deleted == [post["images"]]
        assert attached_rows(run_db, post["id"]) == {"adoption_forms": 0, "upvotes": 0, "comments": 0}
        assert client.get(f"/api/users/donation/{post['id']}", headers=owner.headers).status_code == 404

    def test_upvote_and_remove(self, client, make_user, donation_post):
        owner, fan = make_user(), make_user()
        post = donation_post(owner)

        upvoted = client.post(f"/api/users/donation/{post['id']}/upvote", headers=fan.headers)
        again = client.post(f"/api/users/donation/{post['id']}/upvote", headers=fan.headers)
        detail = client.get(f"/api/users/donation/{post['id']}", headers=fan.headers).json()
        removed = client.post(f"/api/users/donation/{post['id']}/remove-upvote", headers=fan.headers)
        removed_again = client.post(f"/api/users/donation/{post['id']}/remove-upvote", headers=fan.headers)

        assert upvoted.json() == {"message": "Post upvoted successfully", "upvotesCount": 1}
        assert again.status_code == 400
        assert detail["hasUpvoted"] is True
        assert removed.json() == {"message": "Upvote removed successfully", "upvotesCount": 0}
        assert removed_again.json()["message"] == "You have not upvoted this post"

    def test_delete_comment(self, client, make_user, donation_post):
        owner, visitor = make_user(), make_user()
        post = donation_post(owner)
        comment = client.post(
            f"/api/users/donation/{post['id']}/comment", json={"content": "Is she friendly?"}, headers=visitor.headers
        ).json()["comment"]

        forbidden = client.delete(f"/api/users/donation/{post['id']}/comment/{comment['id']}", headers=owner.headers)
        deleted = client.delete(f"/api/users/donation/{post['id']}/comment/{comment['id']}", headers=visitor.headers)

        assert forbidden.status_code == 403
        assert deleted.json() == {"message": "Comment deleted successfully"}
        detail = client.get(f"/api/users/donation/{post['id']}", headers=owner.headers).json()
        assert detail["post"]["comments"] == []


class TestAdoption:
    def test_apply_notifies_owner(self, client, make_user, donation_post, notifications_of):
        owner, adopter = make_user(), make_user()
        post = donation_post(owner)

        response = adopt(client, adopter, post["id"])

        assert response.status_code == 201
        assert response.json()["adoptionForm"]["status"] == "PENDING"
        assert notifications_of(owner.id)[-1].type == "NEW_ADOPTION_APPLICATION"

    @pytest.mark.parametrize("body", [{"description": "Hi"}, {"meetingSchedule": "2030-05-01T10:00:00Z"}])
    def test_apply_requires_fields(self, client, make_user, donation_post, body):
        owner, adopter = make_user(), make_user()
        post = donation_post(owner)

        response = client.post(f"/api/users/donation/{post['id']}/apply", json=body, headers=adopter.headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Description and meeting schedule are required"

    def test_cannot_adopt_own_pet(self, client, make_user, donation_post):
        owner = make_user()
        post = donation_post(owner)

        response = adopt(client, owner, post["id"])

        assert response.status_code == 400
        assert response.json()["message"] == "You cannot apply to adopt your own pet"

    def test_apply_once(self, client, make_user, donation_post):
        owner, adopter = make_user(), make_user()
        post = donation_post(owner)
        adopt(client, adopter, post["id"])

        response = adopt(client, adopter, post["id"])

        assert response.status_code == 400
        assert response.json()["message"] == "You have already applied to adopt this pet"

    def test_accept_rejects_the_rest(self, client, make_user, donation_post, notifications_of):
        owner, chosen, other = make_user(), make_user(), make_user()
        post = donation_post(owner)
        form = adopt(client, chosen, post["id"]).json()["adoptionForm"]
        adopt(client, other, post["id"])

        response = client.put(f"/api/users/donation/application/{form['id']}/accept", headers=owner.headers)

        assert response.status_code == 200
        assert response.json()["adoptionForm"]["status"] == "ACCEPTED"
        detail = client.get(f"/api/users/donation/{post['id']}", headers=owner.headers).json()["post"]
        assert detail["isAvailable"] is False
        assert {f["userId"]: f["status"] for f in detail["adoptionForms"]} == {
            chosen.id: "ACCEPTED",
            other.id: "REJECTED",
        }
        assert notifications_of(chosen.id)[-1].message == 'Your application to adopt "Kitten needs a home" has been accepted!'

        late = adopt(client, make_user(), post["id"])
        assert late.status_code == 400
        assert late.json()["message"] == "This pet is no longer available for adoption"

    def test_only_owner_accepts(self, client, make_user, donation_post):
        owner, adopter = make_user(), make_user()
        post = donation_post(owner)
        form = adopt(client, adopter, post["id"]).json()["adoptionForm"]

        response = client.put(f"/api/users/donation/application/{form['id']}/accept", headers=adopter.headers)

        assert response.status_code == 403
        assert response.json()["message"] == "Only the post owner can accept adoption applications"

    def test_accept_unknown_application(self, client, make_user):
        owner = make_user()
        response = client.put("/api/users/donation/application/nope/accept", headers=owner.headers)

        assert response.status_code == 404

    def test_meetings_for_both_sides(self, client, make_user, donation_post):
        owner, adopter = make_user(), make_user()
        post = donation_post(owner)
        form = adopt(client, adopter, post["id"]).json()["adoptionForm"]
        client.put(f"/api/users/donation/application/{form['id']}/accept", headers=owner.headers)

        as_owner = client.get("/api/users/donation/meetings", headers=owner.headers).json()
        as_adopter = client.get("/api/users/donation/meetings", headers=adopter.headers).json()

        assert as_owner["applicantMeetings"] == []
        assert as_owner["ownerMeetings"][0]["donationPost"]["id"] == post["id"]
        assert as_adopter["applicantMeetings"][0]["id"] == form["id"]
        assert as_adopter["ownerMeetings"] == []
