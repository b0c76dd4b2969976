# Canonical roster columns
PLAYER_COLUMNS = [
    "player_id", "name", "height",
    "pass_score", "attack_score", "set_score",
]

# Optional columns used to filter a shared roster file
FILTER_COLUMNS = ["organizer_id", "game_id"]

NUMERIC_COLUMNS = ["height", "pass_score", "attack_score", "set_score"]

# Header aliases (lower-cased) -> canonical column name.
# Includes the Portuguese headers of the legacy player database.
COLUMN_ALIASES = {
    "id": "player_id",
    "playerid": "player_id",
    "player_id": "player_id",
    "id_usuario": "player_id",
    "usuario_id": "player_id",
    "name": "name",
    "nome": "name",
    "height": "height",
    "altura": "height",
    "pass": "pass_score",
    "passscore": "pass_score",
    "pass_score": "pass_score",
    "passe": "pass_score",
    "attack": "attack_score",
    "attackscore": "attack_score",
    "attack_score": "attack_score",
    "ataque": "attack_score",
    "set": "set_score",
    "setscore": "set_score",
    "set_score": "set_score",
    "levantamento": "set_score",
    "organizerid": "organizer_id",
    "organizer_id": "organizer_id",
    "organizador_id": "organizer_id",
    "gameid": "game_id",
    "game_id": "game_id",
    "id_jogo": "game_id",
    "jogo_id": "game_id",
}
