from notes_api.extensions import db

class Note(db.Model):
    __tablename__ = "notes"

    id = db.Column(db.Integer, primary_key=True)
    datetime = db.Column(db.DateTime(timezone=True), nullable=False)
    # longueur bornée à la validation (1..255); le texte échappé peut dépasser
    title = db.Column(db.Text, nullable=False)
    text = db.Column(db.Text, nullable=False)
