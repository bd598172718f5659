"""Demo data written to empty storage on first start."""

from src.comments.models import Comment
from src.communities.models import Community, Condition
from src.posts.models import Post


DEMO_COMMUNITIES: tuple[Community, ...] = (
    Community(
        id="c1",
        name="Ansiedade Zero",
        description="Um espaço para compartilhar técnicas de respiração e apoio diário.",
        condition=Condition.ANXIETY,
        creator_id="u1",
        members_count=1240,
        tags=("Calma", "Apoio"),
    ),
    Community(
        id="c2",
        name="Foco no TDAH",
        description=(
            "Estratégias de organização e produtividade para mentes neurodivergentes."
        ),
        condition=Condition.ADHD,
        creator_id="u2",
        members_count=850,
        tags=("Produtividade", "Dicas"),
    ),
    Community(
        id="c3",
        name="Espectro Amigo",
        description="Comunidade voltada para adultos e adolescentes no espectro autista.",
        condition=Condition.ASD,
        creator_id="u3",
        members_count=420,
        tags=("Inclusão", "Diálogo"),
    ),
    Community(
        id="c4",
        name="Luz no Fim do Túnel",
        description="Apoio mútuo para quem enfrenta a depressão clínica.",
        condition=Condition.DEPRESSION,
        creator_id="u4",
        members_count=2100,
        tags=("Esperança", "Escuta"),
    ),
)


DEMO_POSTS: tuple[Post, ...] = (
    Post(
        id="1",
        community_id="c1",
        author_id="u1",
        author_name="Ana Souza",
        content=(
            "Hoje tive um dia difícil com minha ansiedade, mas meditar por 10 "
            "minutos realmente ajudou a acalmar meus pensamentos. Alguém mais "
            "usa essa técnica?"
        ),
        created_at="2h atrás",
        comments=(
            Comment(
                id="com1",
                author_id="u2",
                author_name="Marcos Lima",
                content="Eu uso! Me ajuda muito no trabalho.",
                created_at="1h atrás",
            ),
        ),
    ),
    Post(
        id="2",
        community_id="c2",
        author_id="u2",
        author_name="Marcos Lima",
        content=(
            "Acabei de organizar minha mesa usando o método 5S e me sinto muito "
            "mais produtivo para focar no TDAH hoje!"
        ),
        created_at="5h atrás",
    ),
)
