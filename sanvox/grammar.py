# sanvox/grammar.py
"""A grammar for long-form, spoken descriptions of chess moves.

Speech recognisers hand back plain text ("bishop to d7 check"), so the
transcript is parsed against this grammar and converted into standard
algebraic notation. Alternatives are tried strictly in the order written:
the more specific forms come first and that order decides how ambiguous
phrasings are read.

Examples:

    c6                       -> c6
    f captures g4 en passant -> fxg3
    bishop a takes e4        -> Baxe4
    castle queenside         -> O-O-O
    white resigns            -> 0-1
"""

MOVE_GRAMMAR = r"""
start <- whitespace move whitespace { join }

move
    <- // e.g. "bishop d6 check"
       (piece_move / pawn_move / castle) whitespace (checkmate / check) { join }

       // e.g. "Knight to c7"
     / (piece_move / pawn_move / castle)

       // e.g. "White resigns"
     / resign

piece_move
    <- // e.g. "knight A takes B4"
       piece whitespace departure whitespace action whitespace destination { join }

       // e.g. "Rook 2 c7"
     / piece whitespace departure whitespace destination { join }

       // e.g. "Queen to H6"
     / piece whitespace action whitespace destination { join }

       // e.g. "king e3"
     / piece whitespace destination { join }

pawn_move
    <- // e.g. "a captures b5 en passant"
       en_passant

       // e.g. "F captures E8 promote to knight"
     / pawn_capture whitespace pawn_promotion { join }

       // e.g. "c8 promote to Queen"
     / destination whitespace pawn_promotion { join }

       // e.g. "F takes G3"
     / pawn_capture

       // e.g. "c6"
     / destination

/* The move is written as if the captured pawn had moved one square rather
   than two: white g2-g4 captured en passant by black's f4 pawn is fxg3. */
en_passant
    <- parts:(file whitespace capture)
       whitespace
       dest_file:file
       dest_rank:rank
       whitespace
       'en passant'i { en_passant }

pawn_capture <- file whitespace capture whitespace destination { join }

pawn_promotion <- 'promote to'i whitespace piece:piece { promotion }

check <- 'check'i { check }

checkmate <- ('checkmate'i / 'mate'i) { checkmate }

castle <- 'castle'i whitespace side:('kingside'i / 'queenside'i) { castle }

resign <- player:('black'i / 'white'i) whitespace 'resigns'i { resign }

whitespace <- ' '* { empty }

action <- capture / to

to <- ('moves to'i / 'move to'i / 'to'i) { empty }

capture <- ('captures'i / 'capture'i / 'takes'i / 'take'i) { capture }

departure <- square / file / rank

destination <- square

square <- file rank { join }

rank <- [1-8]

file <- [a-h]i { lower }

piece <- king / queen / rook / bishop / knight

king <- 'king'i { king }

queen <- 'queen'i { queen }

rook <- 'rook'i { rook }

bishop <- 'bishop'i { bishop }

knight <- 'knight'i { knight }
"""
