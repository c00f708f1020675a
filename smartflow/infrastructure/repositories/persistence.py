"""
Shared write path for the SQLAlchemy repositories.
"""

from sqlalchemy.orm import Session


def save_entity(session: Session, mapper, model_class, entity):
    """
    Insert the entity's row or overwrite the stored columns in place.
    Returns the persistent model.
    """
    model = session.get(model_class, entity.id) if entity.id is not None else None
    updated_model = mapper.domain_to_model(entity)

    if model is None:
        session.add(updated_model)
        model = updated_model
    else:
        for column in model_class.__table__.columns:
            if column.key != 'id':
                setattr(model, column.key, getattr(updated_model, column.key))

    session.flush()
    return model
