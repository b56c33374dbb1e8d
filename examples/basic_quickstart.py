import logging

from policykit import DecisionLogger, Policy, UnknownActionError, use_permission


def ArticlePolicy() -> Policy:
    return Policy(
        {
            "before": lambda user, article: user["role"] == "super-admin",
            "update": lambda user, article: user["id"] == article["author_id"],
            "delete": lambda user, article: user["id"] == article["author_id"],
        },
        name="article",
    )


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    article = {"title": "My First Article", "author_id": 1}

    perms = use_permission(
        ArticlePolicy(),
        for_user={"id": 1, "name": "John Doe", "role": "editor"},
        logger_sink=DecisionLogger(as_json=True),
    )
    print(perms.allows("update", article))  # True
    print(perms.denies(["update", "delete"], article))  # False
    print(perms.permission(allows=["update", "delete"], on=article, children="<button>Settings</button>"))

    try:
        perms.allows("publish", article)
    except UnknownActionError as e:
        print(e)  # The [publish] action could not be found.


if __name__ == "__main__":
    main()
